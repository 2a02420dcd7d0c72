"""
@Author: DAShaikh10
@Description: `resnet.imagenet.models` package containing all code related to Residual Network (ResNet) models
              for the ImageNet layout (7x7 stem, four stages of residual units, global average pooling head).
"""

from .config import ModelConfig, StageConfig, STAGE_BLOCK_COUNTS, STAGE_PLANES, STAGE_STRIDES
from .pt import ClassifierHead, ConvolutionStem, TorchResNet, build_stage


__all__ = [
    "ClassifierHead",
    "ConvolutionStem",
    "ModelConfig",
    "STAGE_BLOCK_COUNTS",
    "STAGE_PLANES",
    "STAGE_STRIDES",
    "StageConfig",
    "TorchResNet",
    "build_stage",
]
