"""
@Author: DAShaikh10
"""

# pylint: disable=too-many-instance-attributes

import torch

from torch import nn

from resnet.errors import ConfigurationError, check_input
from resnet.residual import BasicBlock
from resnet.residual.basic_block_pt import make_activation
from utils import enums
from .config import ModelConfig, StageConfig

BLOCKS = {
    enums.ResidualBlock.BASIC: BasicBlock,
}


class ConvolutionStem(nn.Module):
    """
    Input stem of the ImageNet ResNet: 7x7 convolution with stride 2, batch normalization, activation
    and 3x3 max. pooling with stride 2. The spatial resolution is reduced by a factor of 4.
    """

    def __init__(
        self,
        in_channels: int = 3,
        out_planes: int = 64,
        activation: enums.ActivationFunction = enums.ActivationFunction.RELU,
    ):
        super().__init__()

        self.in_channels = in_channels
        self.conv1 = nn.Conv2d(
            in_channels=in_channels,
            out_channels=out_planes,
            kernel_size=7,
            stride=2,
            padding=3,
            bias=False,  # Bias is redundant, batch normalization right after has its own shift.
        )
        self.bn1 = nn.BatchNorm2d(self.conv1.out_channels)
        self.activation = make_activation(activation)
        self.maxpool = nn.MaxPool2d(kernel_size=3, stride=2, padding=1)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Forward pass through the stem: convolution, batch normalization, activation and max. pooling.
        """

        check_input(x, self.in_channels, type(self).__name__)

        out: torch.Tensor = self.conv1(x)
        out = self.bn1(out)
        out = self.activation(out)

        return self.maxpool(out)


class ClassifierHead(nn.Module):
    """
    Global average pooling followed by a single fully connected layer.

    No softmax is applied: the logits go straight to the loss (e.g. `CrossEntropyLoss`) or to argmax.
    """

    def __init__(self, num_features: int, num_classes: int):
        super().__init__()

        self.num_features = num_features

        # PyTorch adaptive average pooling serves as global average pooling layer
        # to ensure that the output feature maps are reduced to a fixed size of (1, 1), whatever the input size.
        self.global_avg_pool = nn.AdaptiveAvgPool2d((1, 1))
        self.fc = nn.Linear(num_features, num_classes)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Forward pass through the head, returning logits of shape (batch_size, num_classes).
        """

        check_input(x, self.num_features, type(self).__name__)

        out = self.global_avg_pool(x)

        return self.fc(out.flatten(1))  # Flatten the output for the fully connected layer.


def build_stage(
    block: type[BasicBlock],
    stage: StageConfig,
    in_planes: int,
    activation: enums.ActivationFunction = enums.ActivationFunction.RELU,
) -> nn.Sequential:
    """
    Build one stage: `stage.unit_count` residual units executed in sequence.
    """

    return nn.Sequential(*(block(unit, activation) for unit in stage.unit_configs(in_planes)))


class TorchResNet(nn.Module):
    """
    `PyTorch` implementation of the ImageNet Residual Network (ResNet), e.g. ResNet-34.
    """

    def __init__(
        self,
        config: ModelConfig,
        activation: enums.ActivationFunction = enums.ActivationFunction.RELU,
    ):
        super().__init__()

        self.config = config
        try:
            block = BLOCKS[enums.ResidualBlock(config.block)]
        except (KeyError, ValueError) as e:
            raise ConfigurationError(f"Unsupported residual block type: {config.block!r}") from e

        # Initial convolutional layer and max. pooling.
        self.stem = ConvolutionStem(config.in_channels, config.stem_planes, activation)

        # Stages 1 to 4, each one fed by the output width of the previous one.
        in_planes = config.stem_planes
        stages = []
        for stage in config.stages:
            stages.append(build_stage(block, stage, in_planes, activation))
            in_planes = stage.out_planes
        self.stage1, self.stage2, self.stage3, self.stage4 = stages

        # Global average pooling and fully connected layer for classification.
        self.head = ClassifierHead(config.num_features, config.num_classes)

    def units(self):
        """
        Iterate over every residual unit, in execution order.
        """

        for stage in (self.stage1, self.stage2, self.stage3, self.stage4):
            yield from stage

    def initialize_weights(self, zero_init_residual: bool = True):
        """
        Initialize the weights of the model using the recommended initialization scheme.
        """

        for module in self.modules():
            if isinstance(module, nn.Conv2d):
                # Kaiming Normal (He Initialization)
                # The paper specifically recommends 'fan_out' for deep networks.
                nn.init.kaiming_normal_(module.weight, mode="fan_out", nonlinearity="relu")
                if module.bias is not None:
                    nn.init.constant_(module.bias, 0)
            elif isinstance(module, nn.BatchNorm2d):
                # Standard practice: scale (weight) to 1, shift (bias) to 0
                nn.init.constant_(module.weight, 1)
                nn.init.constant_(module.bias, 0)
            elif isinstance(module, nn.Linear):
                # A normal distribution with std=0.01 is the standard 2015-era practice.
                nn.init.normal_(module.weight, 0, 0.01)
                nn.init.constant_(module.bias, 0)

        # A 2017 paper suggests better performance
        # by initializing the last batch normalization layer in each residual block to zero.
        # https://arxiv.org/abs/1706.02677
        if zero_init_residual:
            for unit in self.units():
                nn.init.constant_(unit.bn2.weight, 0)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Forward pass through the ResNet model.

        Args:
            x: Input tensor of shape (batch_size, 3, height, width), e.g. (batch_size, 3, 224, 224)

        Returns:
            Logits tensor of shape (batch_size, num_classes) containing raw unnormalized
            class scores. These can be passed to CrossEntropyLoss (which applies softmax internally)
            or to softmax/argmax for inference.
        """

        out: torch.Tensor = self.stem(x)

        out = self.stage1(out)
        out = self.stage2(out)
        out = self.stage3(out)
        out = self.stage4(out)

        return self.head(out)
