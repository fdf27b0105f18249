# chlorisafe/services/disinfection/modules/chemistry.py
# Post-dose pH and free chlorine speciation (HOCl / OCl-).
from __future__ import annotations

import math
from typing import Dict

from chlorisafe.schemas.common import ChlorineChemical
from chlorisafe.services.disinfection.constants import KELVIN_OFFSET, KineticConstants
from chlorisafe.services.disinfection.utils import clamp, safe_div


def _ph_shift_coefficients(constants: KineticConstants) -> Dict[ChlorineChemical, float]:
    # gas hydrolyses to HCl (acidic), hypochlorite carries NaOH (caustic)
    return {
        ChlorineChemical.SODIUM_HYPOCHLORITE: constants.ph_shift_hypochlorite,
        ChlorineChemical.CHLORINE_GAS: constants.ph_shift_gas,
    }


def buffer_factor(alkalinity_mgL: float, constants: KineticConstants) -> float:
    return max(alkalinity_mgL, constants.min_buffer_alkalinity)


def post_dose_ph(
    ph: float,
    dose_mgL: float,
    alkalinity_mgL: float,
    chemical: ChlorineChemical,
    constants: KineticConstants,
) -> float:
    """
    pH after dosing, shifted in proportion to dose over buffering capacity:
      pH' = pH + coef * dose / max(alk, 10),  clamped to [2, 12]
    """
    coef = _ph_shift_coefficients(constants)[chemical]
    shifted = ph + coef * dose_mgL / buffer_factor(alkalinity_mgL, constants)
    lo, hi = constants.ph_bounds
    return clamp(shifted, lo, hi)


def hocl_pka(temp_C: float) -> float:
    """Morris (1966): pKa = 3000/T - 10.0686 + 0.0253 T, T in kelvin."""
    t_k = temp_C + KELVIN_OFFSET
    return safe_div(3000.0, t_k) - 10.0686 + 0.0253 * t_k


def hocl_fraction(ph: float, temp_C: float) -> float:
    """Fraction of free chlorine present as HOCl: 1 / (1 + 10^(pH - pKa))."""
    # 10**x stays finite and 1 + 10**x stays distinguishable from 1.0,
    # so the fraction is strictly inside (0, 1) at any temperature
    exponent = clamp(ph - hocl_pka(temp_C), -15.0, 300.0)
    return 1.0 / (1.0 + math.pow(10.0, exponent))
