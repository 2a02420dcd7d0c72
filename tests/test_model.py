"""Tests for the stem, stage builder, classifier head and the assembled ResNet."""

from __future__ import annotations

import pytest
import torch
import torchvision.models as tv_models

from resnet.errors import ConfigurationError, ShapeMismatchError
from resnet.imagenet.models import (
    ClassifierHead,
    ConvolutionStem,
    ModelConfig,
    StageConfig,
    TorchResNet,
    build_stage,
)
from resnet.residual import BasicBlock, IdentityShortcut, ProjectionShortcut
from utils import enums

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def resnet34() -> TorchResNet:
    torch.manual_seed(0)
    model = TorchResNet(ModelConfig.from_variant(enums.Variant.RESNET34, num_classes=1000))
    model.initialize_weights()
    return model.eval()


# ---------------------------------------------------------------------------
# ConvolutionStem
# ---------------------------------------------------------------------------


class TestConvolutionStem:
    def test_layers(self) -> None:
        stem = ConvolutionStem()
        assert stem.conv1.kernel_size == (7, 7)
        assert stem.conv1.stride == (2, 2)
        assert stem.conv1.padding == (3, 3)
        assert stem.conv1.out_channels == 64
        assert stem.maxpool.kernel_size == 3
        assert stem.maxpool.stride == 2
        assert stem.maxpool.padding == 1

    @pytest.mark.parametrize(("size", "expected"), [(224, 56), (64, 16), (32, 8)])
    def test_reduces_resolution_by_four(self, size: int, expected: int) -> None:
        out = ConvolutionStem().eval()(torch.randn(2, 3, size, size))
        assert out.shape == (2, 64, expected, expected)

    def test_wrong_channel_count_raises(self) -> None:
        with pytest.raises(ShapeMismatchError):
            ConvolutionStem()(torch.randn(2, 1, 64, 64))

    def test_missing_batch_dimension_raises(self) -> None:
        with pytest.raises(ShapeMismatchError):
            ConvolutionStem()(torch.randn(3, 64, 64))

    def test_unknown_activation_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ConvolutionStem(activation="gelu")


# ---------------------------------------------------------------------------
# build_stage
# ---------------------------------------------------------------------------


class TestBuildStage:
    @pytest.mark.parametrize("unit_count", [1, 3, 6])
    def test_unit_count(self, unit_count: int) -> None:
        stage = build_stage(BasicBlock, StageConfig(unit_count, 128, 2), in_planes=64)
        assert len(stage) == unit_count

    def test_only_first_unit_strides_or_projects(self) -> None:
        stage = build_stage(BasicBlock, StageConfig(4, 128, 2), in_planes=64)
        first, *rest = list(stage)
        assert first.conv1.stride == (2, 2)
        assert isinstance(first.shortcut, ProjectionShortcut)
        for unit in rest:
            assert unit.conv1.stride == (1, 1)
            assert isinstance(unit.shortcut, IdentityShortcut)

    def test_first_stage_is_all_identity(self) -> None:
        stage = build_stage(BasicBlock, StageConfig(3, 64, 1), in_planes=64)
        assert all(isinstance(unit.shortcut, IdentityShortcut) for unit in stage)

    def test_units_run_in_sequence(self) -> None:
        stage = build_stage(BasicBlock, StageConfig(2, 128, 2), in_planes=64).eval()
        out = stage(torch.randn(2, 64, 16, 16))
        assert out.shape == (2, 128, 8, 8)


# ---------------------------------------------------------------------------
# ClassifierHead
# ---------------------------------------------------------------------------


class TestClassifierHead:
    @pytest.mark.parametrize(("height", "width"), [(1, 1), (7, 7), (3, 5)])
    def test_any_spatial_size(self, height: int, width: int) -> None:
        head = ClassifierHead(512, 10)
        assert head(torch.randn(2, 512, height, width)).shape == (2, 10)

    def test_logits_are_not_normalized(self) -> None:
        head = ClassifierHead(8, 4)
        out = head(torch.randn(3, 8, 2, 2))
        assert not torch.allclose(out.sum(dim=1), torch.ones(3))

    def test_wrong_channel_count_raises(self) -> None:
        with pytest.raises(ShapeMismatchError):
            ClassifierHead(512, 10)(torch.randn(2, 256, 7, 7))


# ---------------------------------------------------------------------------
# TorchResNet
# ---------------------------------------------------------------------------


class TestTorchResNet:
    def test_stage_unit_counts(self, resnet34: TorchResNet) -> None:
        counts = [len(s) for s in (resnet34.stage1, resnet34.stage2, resnet34.stage3, resnet34.stage4)]
        assert counts == [3, 4, 6, 3]

    def test_units_in_execution_order(self, resnet34: TorchResNet) -> None:
        units = list(resnet34.units())
        assert len(units) == 16
        assert [u.unit.out_planes for u in units] == [64] * 3 + [128] * 4 + [256] * 6 + [512] * 3

    def test_exactly_three_projections(self, resnet34: TorchResNet) -> None:
        projections = [u for u in resnet34.units() if isinstance(u.shortcut, ProjectionShortcut)]
        assert len(projections) == 3

    def test_canonical_imagenet_shape(self, resnet34: TorchResNet) -> None:
        with torch.no_grad():
            out = resnet34(torch.randn(1, 3, 224, 224))
        assert out.shape == (1, 1000)

    @pytest.mark.parametrize(("batch", "height", "width"), [(2, 32, 32), (2, 40, 64), (3, 96, 96)])
    def test_output_shape_independent_of_input_size(
        self, resnet34: TorchResNet, batch: int, height: int, width: int
    ) -> None:
        with torch.no_grad():
            out = resnet34(torch.randn(batch, 3, height, width))
        assert out.shape == (batch, 1000)

    def test_forward_is_deterministic(self, resnet34: TorchResNet) -> None:
        x = torch.randn(2, 3, 64, 64)
        with torch.no_grad():
            first = resnet34(x)
            second = resnet34(x)
        assert torch.equal(first, second)

    def test_wrong_channel_count_raises(self, resnet34: TorchResNet) -> None:
        with pytest.raises(ShapeMismatchError):
            resnet34(torch.randn(1, 1, 64, 64))

    def test_custom_num_classes(self) -> None:
        model = TorchResNet(ModelConfig.from_block_counts([1, 1, 1, 1], num_classes=7)).eval()
        with torch.no_grad():
            assert model(torch.randn(2, 3, 32, 32)).shape == (2, 7)

    def test_zero_init_residual(self, resnet34: TorchResNet) -> None:
        for unit in resnet34.units():
            assert torch.count_nonzero(unit.bn2.weight) == 0

    def test_initialize_weights_without_zero_init(self) -> None:
        model = TorchResNet(ModelConfig.from_block_counts([1, 1, 1, 1], num_classes=10))
        model.initialize_weights(zero_init_residual=False)
        for unit in model.units():
            assert torch.all(unit.bn2.weight == 1)
        assert torch.all(model.head.fc.bias == 0)

    @pytest.mark.parametrize(
        ("variant", "reference"),
        [(enums.Variant.RESNET18, tv_models.resnet18), (enums.Variant.RESNET34, tv_models.resnet34)],
    )
    def test_parameter_count_matches_reference(self, variant: enums.Variant, reference) -> None:
        model = TorchResNet(ModelConfig.from_variant(variant, num_classes=1000))
        expected = sum(p.numel() for p in reference(weights=None).parameters())
        assert sum(p.numel() for p in model.parameters()) == expected


# ---------------------------------------------------------------------------
# Documentation
# ---------------------------------------------------------------------------


class TestDocstrings:
    @pytest.mark.parametrize(
        "member",
        [
            ConvolutionStem.forward,
            ClassifierHead.forward,
            IdentityShortcut.forward,
            ProjectionShortcut.forward,
            BasicBlock.forward,
            TorchResNet.forward,
            ModelConfig.num_features,
        ],
    )
    def test_public_members_documented(self, member) -> None:
        assert member.__doc__ and member.__doc__.strip()
