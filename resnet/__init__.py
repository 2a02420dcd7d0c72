"""
@Author: DAShaikh10
@Description: `resnet` package containing all code related to Residual Networks (ResNets),
              including model definitions, the model engine, configuration data-classes and errors.
"""

from .config import ResNetConfig
from .errors import ConfigurationError, ResNetError, ShapeMismatchError

__all__ = ["ConfigurationError", "ResNetConfig", "ResNetError", "ShapeMismatchError"]
