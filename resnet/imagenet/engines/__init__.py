"""
@Author: DAShaikh10
@Description: `resnet.imagenet.engines` package containing all code related to building, inspecting and evaluating
              ImageNet Residual Networks (ResNets).
"""

from .pt_engine import TorchResNetEngine

__all__ = ["TorchResNetEngine"]
