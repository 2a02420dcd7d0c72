"""
@Author: DAShaikh10
"""

from enum import Enum


class IgnoreCaseEnum(str, Enum):
    """
    Base enum class that provides case-insensitive lookup.
    """

    @classmethod
    def _missing_(cls, value):
        """
        Handle case-insensitive lookup.
        """

        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member

        return None


class ActivationFunction(IgnoreCaseEnum):
    """
    Enum for activation functions.
    """

    RELU = "ReLU"


class Device(IgnoreCaseEnum):
    """
    Enum for devices.
    """

    CPU = "CPU"
    GPU = "GPU"


class ResidualBlock(IgnoreCaseEnum):
    """
    Enum for residual block types.
    """

    BASIC = "Basic"


class Variant(IgnoreCaseEnum):
    """
    Enum for ImageNet ResNet variants built from basic residual blocks.
    """

    RESNET18 = "ResNet-18"
    RESNET34 = "ResNet-34"


class WeightInitialization(IgnoreCaseEnum):
    """
    Enum for weight initialization methods.
    """

    HE = "He"
