"""
@Author: DAShaikh10
@Description: `resnet.residual` package containing all code related to residual blocks in Residual Networks (ResNets).
"""

from .basic_block_pt import BasicBlock
from .config import UnitConfig
from .shortcut_pt import IdentityShortcut, ProjectionShortcut, make_shortcut

__all__ = ["BasicBlock", "IdentityShortcut", "ProjectionShortcut", "UnitConfig", "make_shortcut"]
