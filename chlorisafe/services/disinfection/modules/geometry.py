# chlorisafe/services/disinfection/modules/geometry.py
# Basin volume per tank type (Strategy + registry, one class per shape).
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict

from chlorisafe.schemas.common import TankType
from chlorisafe.schemas.disinfection import TankDimensions
from chlorisafe.services.disinfection.utils import non_negative


class UnsupportedTankTypeError(ValueError):
    """Raised when no geometry is registered for a tank type."""

    def __init__(self, tank_type: object) -> None:
        super().__init__(f"No volume model registered for tank type: {tank_type!r}")
        self.tank_type = tank_type


class TankGeometry(ABC):
    """Common parent of the basin shapes. Each one reads only its own dimensions."""

    @abstractmethod
    def volume_m3(self, dims: TankDimensions) -> float:
        pass


def _cylinder_volume(diameter_m: float, height_m: float) -> float:
    radius = non_negative(diameter_m) / 2.0
    return math.pi * radius**2 * non_negative(height_m)


class PipeGeometry(TankGeometry):
    """Full-bore pipe: cylinder along its length."""

    def volume_m3(self, dims: TankDimensions) -> float:
        return _cylinder_volume(dims.diameter_m, dims.length_m)


class CircularTankGeometry(TankGeometry):
    def volume_m3(self, dims: TankDimensions) -> float:
        return _cylinder_volume(dims.diameter_m, dims.water_depth_m)


class RectangularTankGeometry(TankGeometry):
    """Also used for square tanks; the caller keeps width equal to length."""

    def volume_m3(self, dims: TankDimensions) -> float:
        return (
            non_negative(dims.length_m)
            * non_negative(dims.width_m)
            * non_negative(dims.water_depth_m)
        )


GEOMETRIES: Dict[TankType, TankGeometry] = {
    TankType.PIPE: PipeGeometry(),
    TankType.CIRCULAR: CircularTankGeometry(),
    TankType.RECTANGULAR: RectangularTankGeometry(),
    TankType.SQUARE: RectangularTankGeometry(),
}

_missing = set(TankType) - set(GEOMETRIES)
if _missing:
    raise RuntimeError(f"Tank types without a geometry: {sorted(t.name for t in _missing)}")


def basin_volume_m3(tank_type: TankType, dims: TankDimensions) -> float:
    geometry = GEOMETRIES.get(tank_type)
    if geometry is None:
        raise UnsupportedTankTypeError(tank_type)
    return geometry.volume_m3(dims)
