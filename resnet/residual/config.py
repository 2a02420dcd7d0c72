"""
@Author: DAShaikh10
@Description: `resnet.residual` package containing the immutable descriptor of a single residual unit.
"""

from dataclasses import dataclass

from resnet.errors import ConfigurationError


@dataclass(frozen=True)
class UnitConfig:
    """
    Configuration data-class for a single residual unit.

    `requires_projection` is derived from the other fields when omitted.
    Passing a value that disagrees with `stride != 1 or in_planes != out_planes`
    raises `ConfigurationError`, as the shortcut could not be added to F(x) element-wise.
    """

    in_planes: int
    out_planes: int
    stride: int = 1
    requires_projection: None | bool = None

    def __post_init__(self):
        if self.in_planes <= 0 or self.out_planes <= 0:
            raise ConfigurationError(
                f"Residual unit planes must be positive, got in_planes={self.in_planes}, out_planes={self.out_planes}"
            )
        if self.stride < 1:
            raise ConfigurationError(f"Residual unit stride must be >= 1, got {self.stride}")

        expected = self.stride != 1 or self.in_planes != self.out_planes
        if self.requires_projection is None:
            # Frozen data-class, so bypass `__setattr__` to fill in the derived field.
            object.__setattr__(self, "requires_projection", expected)
        elif self.requires_projection != expected:
            raise ConfigurationError(
                f"requires_projection={self.requires_projection} is inconsistent with "
                f"in_planes={self.in_planes}, out_planes={self.out_planes}, stride={self.stride}"
            )
