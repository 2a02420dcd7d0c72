"""
@Author: DAShaikh10
@Description: Exceptions raised while building or running a Residual Network (ResNet).
"""

import torch


class ResNetError(Exception):
    """
    Base class for every error raised by the `resnet` package.
    """


class ConfigurationError(ResNetError, ValueError):
    """
    Raised when a unit, stage or model configuration is malformed.
    """


class ShapeMismatchError(ResNetError, ValueError):
    """
    Raised when a tensor does not match the fixed shape a component was built for.
    """


def check_input(x: torch.Tensor, channels: int, component: str):
    """
    Validate that `x` is a 4-D `(batch, channels, height, width)` tensor with the expected channel count.
    """

    if x.dim() != 4:
        raise ShapeMismatchError(
            f"{component} expects a 4-D (N, C, H, W) tensor, got {x.dim()}-D tensor of shape {tuple(x.shape)}"
        )
    if x.shape[1] != channels:
        raise ShapeMismatchError(f"{component} expects {channels} input channels, got {x.shape[1]}")
