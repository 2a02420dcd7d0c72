"""
@Author: DAShaikh10
@Description: Basic residual block implementation for Residual Network (ResNet) in PyTorch,
              using Option B (projection shortcut with a 1x1 convolution for dimension mismatch)
              as described in the original research paper for the ImageNet models.
"""

import torch

from torch import nn

from resnet.errors import ConfigurationError, ShapeMismatchError, check_input
from utils import enums
from .config import UnitConfig
from .shortcut_pt import make_shortcut

ACTIVATIONS = {
    enums.ActivationFunction.RELU: nn.ReLU,
}


def make_activation(activation: enums.ActivationFunction) -> nn.Module:
    """
    Build the activation layer for `activation`, accepting the enum or its case-insensitive name.
    """

    try:
        return ACTIVATIONS[enums.ActivationFunction(activation)]()
    except ValueError as e:
        raise ConfigurationError(f"Unsupported activation function: {activation!r}") from e


class BasicBlock(nn.Module):
    """
    Basic residual block for Residual Network _(ResNet)_.

    The research paper authors proposed two options for the shortcut connection
    when the dimensions of the input and output do not match:
    - `Option A`: Identity shortcut with zero-padding for dimension mismatch _(used in CIFAR-10)_.
    - `Option B`: Projection shortcut using 1x1 convolution to match dimensions _(used in ImageNet)_.

    This block uses `Option B`, so every unit that changes the channel count or the spatial resolution
    carries a `ProjectionShortcut`; all other units use an `IdentityShortcut`.
    """

    def __init__(
        self,
        unit: UnitConfig,
        activation: enums.ActivationFunction = enums.ActivationFunction.RELU,
    ):
        super().__init__()

        self.unit = unit

        # Use the prescribed stride for the first convolutional layer in the block.
        # This layer is responsible for downsampling the feature maps when needed (e.g., when stride > 1).
        self.conv1 = nn.Conv2d(
            in_channels=unit.in_planes,
            out_channels=unit.out_planes,
            kernel_size=3,
            stride=unit.stride,
            padding=1,
            bias=False,
        )
        self.bn1 = nn.BatchNorm2d(self.conv1.out_channels)

        # The second convolutional layer in the block always has a stride of 1, as it does not perform downsampling.
        self.conv2 = nn.Conv2d(
            in_channels=unit.out_planes,
            out_channels=unit.out_planes,
            kernel_size=3,
            stride=1,
            padding=1,
            bias=False,
        )
        self.bn2 = nn.BatchNorm2d(self.conv2.out_channels)

        self.activation = make_activation(activation)
        self.shortcut = make_shortcut(unit)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Forward pass through the basic residual block.
        """

        check_input(x, self.unit.in_planes, type(self).__name__)

        # First conv. layer with downsampling, batch normalization and activation.
        out: torch.Tensor = self.conv1(x)
        out = self.bn1(out)
        out = self.activation(out)

        # Second conv. layer with batch normalization.
        out = self.conv2(out)
        out = self.bn2(out)

        # Finally, add the output of the second conv. layer to the shortcut connection.
        # F(x) = H(x) - x => H(x) = F(x) + x
        identity = self.shortcut(x)
        if identity.shape != out.shape:
            raise ShapeMismatchError(
                f"Shortcut shape {tuple(identity.shape)} does not match residual shape {tuple(out.shape)}"
            )

        out = out + identity

        # As mentioned in the research paper,
        # the activation is applied after the addition of the shortcut connection.
        return self.activation(out)
