# chlorisafe/services/disinfection/modules/retention.py
from __future__ import annotations

from dataclasses import dataclass

from chlorisafe.services.disinfection.constants import (
    HOURS_PER_DAY,
    MIN_PER_HOUR,
    KineticConstants,
)
from chlorisafe.services.disinfection.utils import non_negative


@dataclass(frozen=True)
class RetentionResult:
    baffle_factor: float
    retention_time_min: float
    t10_min: float
    effective_volume_m3: float


def effective_baffle_factor(
    is_baffled: bool, baffle_factor: float, constants: KineticConstants
) -> float:
    """Configured T10/T when baffled, otherwise the fully mixed fallback."""
    if is_baffled:
        return non_negative(baffle_factor)
    return constants.unbaffled_factor


def theoretical_time_min(volume_m3: float, flow_m3d: float) -> float:
    """Hydraulic residence time V/Q in minutes; 0 unless both are positive."""
    flow_m3h = flow_m3d / HOURS_PER_DAY
    if volume_m3 > 0.0 and flow_m3h > 0.0:
        return volume_m3 / flow_m3h * MIN_PER_HOUR
    return 0.0


def compute_retention(
    volume_m3: float,
    flow_m3d: float,
    is_baffled: bool,
    baffle_factor: float,
    constants: KineticConstants,
) -> RetentionResult:
    bf = effective_baffle_factor(is_baffled, baffle_factor, constants)
    t_min = theoretical_time_min(volume_m3, flow_m3d)
    return RetentionResult(
        baffle_factor=bf,
        retention_time_min=t_min,
        t10_min=t_min * bf,
        effective_volume_m3=volume_m3 * bf,
    )
