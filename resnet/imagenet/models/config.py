"""
@Author: DAShaikh10
@Description: `resnet.imagenet.models` package containing all code related to Residual Network (ResNet) model config.
"""

from dataclasses import dataclass

from resnet.errors import ConfigurationError
from resnet.residual import UnitConfig
from utils import enums

# Channel widths and first-unit strides of the four stages, as in Table 1 of the research paper.
STAGE_PLANES = (64, 128, 256, 512)
STAGE_STRIDES = (1, 2, 2, 2)

# Number of residual units per stage for the basic-block variants.
STAGE_BLOCK_COUNTS = {
    enums.Variant.RESNET18: (2, 2, 2, 2),
    enums.Variant.RESNET34: (3, 4, 6, 3),
}

NUM_STAGES = len(STAGE_PLANES)


@dataclass(frozen=True)
class StageConfig:
    """
    Configuration data-class for one stage, i.e. a run of residual units sharing the same output width.
    """

    unit_count: int
    out_planes: int
    stride: int

    def __post_init__(self):
        if self.unit_count <= 0:
            raise ConfigurationError(f"A stage needs at least one residual unit, got unit_count={self.unit_count}")
        if self.out_planes <= 0:
            raise ConfigurationError(f"Stage planes must be positive, got {self.out_planes}")
        if self.stride < 1:
            raise ConfigurationError(f"Stage stride must be >= 1, got {self.stride}")

    def unit_configs(self, in_planes: int) -> tuple[UnitConfig, ...]:
        """
        Ordered unit descriptors of the stage.

        Only the first unit uses the stage stride (and possibly a projection shortcut);
        every following unit keeps the resolution and maps `out_planes` to `out_planes`.
        """

        strides = [self.stride] + [1] * (self.unit_count - 1)
        units = []
        current_in_planes = in_planes
        for s in strides:
            units.append(UnitConfig(current_in_planes, self.out_planes, s))
            current_in_planes = self.out_planes  # Update for the next unit in this stage.

        return tuple(units)


@dataclass(frozen=True)
class ModelConfig:
    """
    Configuration data-class for Residual Network (ResNet) model.
    """

    stages: tuple[StageConfig, ...]
    num_classes: int
    block: enums.ResidualBlock = enums.ResidualBlock.BASIC
    in_channels: int = 3
    stem_planes: int = STAGE_PLANES[0]

    def __post_init__(self):
        # Tuples keep the descriptor hashable and immutable even when a list was passed in.
        object.__setattr__(self, "stages", tuple(self.stages))
        try:
            object.__setattr__(self, "block", enums.ResidualBlock(self.block))
        except ValueError as e:
            raise ConfigurationError(f"Unsupported residual block type: {self.block!r}") from e

        if len(self.stages) != NUM_STAGES:
            raise ConfigurationError(f"Expected exactly {NUM_STAGES} stages, got {len(self.stages)}")
        for i, stage in enumerate(self.stages):
            expected_stride = STAGE_STRIDES[i]
            if stage.stride != expected_stride:
                raise ConfigurationError(f"Stage {i + 1} must have stride {expected_stride}, got {stage.stride}")
            expected_planes = STAGE_PLANES[i]
            if stage.out_planes != expected_planes:
                raise ConfigurationError(f"Stage {i + 1} must have {expected_planes} planes, got {stage.out_planes}")
        if self.num_classes <= 0:
            raise ConfigurationError(f"num_classes must be positive, got {self.num_classes}")
        if self.in_channels <= 0 or self.stem_planes <= 0:
            raise ConfigurationError(
                f"Stem channels must be positive, got in_channels={self.in_channels}, stem_planes={self.stem_planes}"
            )

    @classmethod
    def from_block_counts(
        cls,
        block_counts,
        num_classes: int,
        block: enums.ResidualBlock = enums.ResidualBlock.BASIC,
    ) -> "ModelConfig":
        """
        Build the canonical four-stage configuration (64 -> 128 -> 256 -> 512) from per-stage unit counts.
        """

        block_counts = tuple(block_counts)
        if len(block_counts) != NUM_STAGES:
            raise ConfigurationError(f"Expected {NUM_STAGES} stage block counts, got {len(block_counts)}")

        stages = tuple(
            StageConfig(unit_count=count, out_planes=planes, stride=stride)
            for count, planes, stride in zip(block_counts, STAGE_PLANES, STAGE_STRIDES)
        )

        return cls(stages=stages, num_classes=num_classes, block=block)

    @classmethod
    def from_variant(cls, variant: enums.Variant, num_classes: int) -> "ModelConfig":
        """
        Build the configuration of a named variant, e.g. `ResNet-34`.
        """

        try:
            block_counts = STAGE_BLOCK_COUNTS[enums.Variant(variant)]
        except (KeyError, ValueError) as e:
            raise ConfigurationError(f"Unsupported ResNet variant: {variant!r}") from e

        return cls.from_block_counts(block_counts, num_classes)

    @property
    def depth(self) -> int:
        """
        Number of weighted layers: two convolutions per basic unit, plus the stem convolution and the classifier.
        """

        return 2 * sum(stage.unit_count for stage in self.stages) + 2

    @property
    def num_features(self) -> int:
        """
        Width of the feature vector fed to the classifier head, i.e. the output planes of the last stage.
        """

        return self.stages[-1].out_planes
