# chlorisafe/services/disinfection/modules/ct.py
from __future__ import annotations

from typing import Tuple

from chlorisafe.services.disinfection.utils import non_negative


def applied_ct(dose_mgL: float, t10_min: float) -> float:
    """Free chlorine Ct (mg·min/L) = dose x T10."""
    return non_negative(dose_mgL * t10_min)


def effective_ct(dose_mgL: float, hocl_fraction: float, t10_min: float) -> float:
    """HOCl-only Ct: the biocidal share of the applied Ct."""
    return non_negative(dose_mgL * hocl_fraction * t10_min)


def compute_ct(dose_mgL: float, hocl_fraction: float, t10_min: float) -> Tuple[float, float]:
    return (
        applied_ct(dose_mgL, t10_min),
        effective_ct(dose_mgL, hocl_fraction, t10_min),
    )
