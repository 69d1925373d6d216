from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class ScaleFactors:
    """
    Per-axis scale factors, resolved at the call site.

    Use one of the constructors instead of passing loosely typed values:

        ScaleFactors.uniform(2)            # (2, 2, 2)
        ScaleFactors.per_axis(2, 3)        # (2, 3, 1)
        ScaleFactors.from_vector((2, 3))   # (2, 3, 1)
    """

    x: float
    y: float
    z: float = 1.0

    @classmethod
    def uniform(cls, factor: float) -> ScaleFactors:
        return cls(float(factor), float(factor), float(factor))

    @classmethod
    def per_axis(
        cls, x: float, y: float, z: float = 1.0
    ) -> ScaleFactors:
        return cls(float(x), float(y), float(z))

    @classmethod
    def from_vector(cls, vector: Sequence[float]) -> ScaleFactors:
        """
        Builds factors from a 2 or 3 component vector. A missing z
        component means no scaling along z.
        """
        if len(vector) == 2:
            return cls(float(vector[0]), float(vector[1]))
        if len(vector) == 3:
            return cls(float(vector[0]), float(vector[1]), float(vector[2]))
        raise InvalidArgumentError(
            f"Scale vector needs 2 or 3 components, got {len(vector)}"
        )

    def has_zero(self) -> bool:
        return self.x == 0 or self.y == 0 or self.z == 0
