# chlorisafe/services/disinfection/utils.py
from __future__ import annotations

import math

from chlorisafe.services.disinfection.constants import KineticConstants


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp x to [lo, hi]."""
    return max(lo, min(hi, x))


def non_negative(x: float) -> float:
    return max(0.0, float(x))


def safe_div(num: float, den: float) -> float:
    """num / den, or 0.0 when den is not strictly positive."""
    if den > 0.0:
        return num / den
    return 0.0


def temperature_correction(temp_C: float, constants: KineticConstants) -> float:
    """theta ** (T - Tref). Shared by the bacteria and virus models."""
    return math.pow(constants.theta, temp_C - constants.ref_temp_C)
