"""
@Author: DAShaikh10
"""

# pylint: disable=too-many-instance-attributes

from dataclasses import dataclass

from utils import enums


@dataclass
class ResNetConfig:
    """
    Configuration data-class for Residual Network (ResNet).
    """

    # Model fields.
    variant: enums.Variant = enums.Variant.RESNET34
    num_classes: int = 1000
    activation: enums.ActivationFunction = enums.ActivationFunction.RELU

    # Runtime fields.
    device: None | enums.Device = None
    seed: int = 42

    # Initialization fields.
    weight_initialization: enums.WeightInitialization = enums.WeightInitialization.HE
    zero_init_residual: bool = True

    # Summary fields, the input shape reported by `torchinfo`.
    batch_size: int = 1
    image_size: int = 224
