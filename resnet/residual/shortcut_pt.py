"""
@Author: DAShaikh10
@Description: Shortcut connections for residual blocks in PyTorch.
              A shortcut is either the identity mapping or a projection (Option B of the research paper),
              and the choice is checked against the unit configuration at construction time.
"""

import torch

from torch import nn

from resnet.errors import ConfigurationError
from .config import UnitConfig


class IdentityShortcut(nn.Module):
    """
    Identity shortcut: `shortcut(x) = x`.

    Only valid when the unit keeps both the channel count and the spatial resolution.
    """

    def __init__(self, unit: UnitConfig):
        super().__init__()

        if unit.requires_projection:
            raise ConfigurationError(
                f"Identity shortcut cannot map {unit.in_planes} -> {unit.out_planes} planes with stride {unit.stride}"
            )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Return the input unchanged.
        """

        return x


class ProjectionShortcut(nn.Module):
    """
    Projection shortcut: `shortcut(x) = BN(W_s * x)` where `W_s` is a 1x1 convolution.

    The 1x1 convolution uses the same stride as the first convolution of the unit,
    so the shortcut and F(x) end up with identical shapes.
    """

    def __init__(self, unit: UnitConfig):
        super().__init__()

        if not unit.requires_projection:
            raise ConfigurationError(
                f"Projection shortcut is not needed for {unit.in_planes} -> {unit.out_planes} planes "
                f"with stride {unit.stride}"
            )

        self.conv = nn.Conv2d(
            in_channels=unit.in_planes,
            out_channels=unit.out_planes,
            kernel_size=1,
            stride=unit.stride,
            bias=False,
        )
        self.bn = nn.BatchNorm2d(self.conv.out_channels)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Project the input to the output width and resolution of the unit.
        """

        return self.bn(self.conv(x))


def make_shortcut(unit: UnitConfig) -> IdentityShortcut | ProjectionShortcut:
    """
    Build the shortcut variant prescribed by `unit.requires_projection`.
    """

    if unit.requires_projection:
        return ProjectionShortcut(unit)

    return IdentityShortcut(unit)
