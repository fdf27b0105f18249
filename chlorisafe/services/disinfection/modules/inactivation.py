# chlorisafe/services/disinfection/modules/inactivation.py
# Log-reduction credits from Ct (Keegan et al. 2012 / WaterVal).
#
# - Bacteria: first-order kinetics, LRV = k * theta^(T-20) * f_turb * Ct
# - Virus: Ct normalised to 20 °C, then read off the breakpoint table
# Both are capped to [0, max_lrv].
from __future__ import annotations

from typing import Sequence, Tuple

from chlorisafe.schemas.common import TurbidityLevel
from chlorisafe.services.disinfection.constants import KineticConstants
from chlorisafe.services.disinfection.utils import clamp, temperature_correction


def interpolate_lrv(ct20: float, breakpoints: Sequence[Tuple[float, float]]) -> float:
    """
    Piecewise-linear lookup on a sorted (Ct20, LRV) table.

    Below the first breakpoint the first LRV is returned (0 for the virus table).
    Past the last breakpoint the final segment's slope is extended. No cap here.
    """
    x_first, y_first = breakpoints[0]
    if ct20 <= x_first:
        return y_first

    for (x0, y0), (x1, y1) in zip(breakpoints, breakpoints[1:]):
        if ct20 <= x1:
            return y0 + (ct20 - x0) * (y1 - y0) / (x1 - x0)

    (x0, y0), (x1, y1) = breakpoints[-2], breakpoints[-1]
    slope = (y1 - y0) / (x1 - x0)
    return y1 + (ct20 - x1) * slope


def bacteria_rate(
    temp_C: float, turbidity: TurbidityLevel, constants: KineticConstants
) -> float:
    """Temperature- and turbidity-corrected rate constant, L/(mg·min)."""
    return (
        constants.k_bacteria
        * temperature_correction(temp_C, constants)
        * constants.turbidity_factors[turbidity]
    )


def bacteria_lrv(
    ct: float, temp_C: float, turbidity: TurbidityLevel, constants: KineticConstants
) -> float:
    raw = bacteria_rate(temp_C, turbidity, constants) * ct
    return clamp(raw, 0.0, constants.max_lrv)


def virus_lrv(ct: float, temp_C: float, constants: KineticConstants) -> float:
    """Turbidity never enters the virus credit."""
    ct20 = ct * temperature_correction(temp_C, constants)
    raw = interpolate_lrv(ct20, constants.virus_breakpoints)
    return clamp(raw, 0.0, constants.max_lrv)
