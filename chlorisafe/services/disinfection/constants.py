# chlorisafe/services/disinfection/constants.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from chlorisafe.schemas.common import TurbidityLevel

# ---------------------------------------------------------
# 1. Unit conversions
# ---------------------------------------------------------
HOURS_PER_DAY = 24.0
MIN_PER_HOUR = 60.0
MG_PER_KG_PER_M3 = 1000.0  # kg/m³ -> g/m³ (= mg/L)
KELVIN_OFFSET = 273.15


# ---------------------------------------------------------
# 2. Kinetic / regulatory table (Keegan et al. 2012, WaterVal)
# ---------------------------------------------------------
def _default_turbidity_factors() -> Mapping[TurbidityLevel, float]:
    return MappingProxyType(
        {
            TurbidityLevel.LOW: 1.0,  # no penalty
            TurbidityLevel.MID: 0.8,  # 20 % reduction in k
            TurbidityLevel.HIGH: 0.5,  # 50 % reduction in k
        }
    )


# (Ct20 mg·min/L, LRV) at 20 °C, sorted by Ct20. Enterovirus benchmarks.
VIRUS_LRV_BREAKPOINTS: Tuple[Tuple[float, float], ...] = (
    (0.0, 0.0),
    (1.0, 2.0),
    (2.0, 3.0),
    (3.0, 4.0),
)


@dataclass(frozen=True)
class KineticConstants:
    """
    Immutable constants table injected into the engine.

    k_bacteria   : E. coli rate constant at 20 °C, L/(mg·min)
    theta        : Arrhenius-type temperature correction base
    ref_temp_C   : reference temperature of the rate constants
    turbidity_factors : k multiplier per turbidity band (shielding)
    virus_breakpoints : sorted (Ct20, LRV) table, extrapolated with the last slope
    max_lrv      : regulatory cap on any claimed credit
    unbaffled_factor  : T10/T used when the basin is not baffled (fully mixed)
    pipe_baffle_factor: T10/T locked in when a pipe is selected
    ph_shift_hypochlorite / ph_shift_gas : pH units per (mg/L dose / buffer)
    min_buffer_alkalinity : floor on alkalinity in the pH shift model
    ph_bounds    : (lo, hi) clamp for post-dose pH
    ct_benchmark : Ct below which an advisory is raised, mg·min/L
    """

    k_bacteria: float = 4.6
    theta: float = 1.07
    ref_temp_C: float = 20.0
    turbidity_factors: Mapping[TurbidityLevel, float] = field(
        default_factory=_default_turbidity_factors
    )
    virus_breakpoints: Tuple[Tuple[float, float], ...] = VIRUS_LRV_BREAKPOINTS
    max_lrv: float = 4.0

    unbaffled_factor: float = 0.1
    pipe_baffle_factor: float = 0.9

    ph_shift_hypochlorite: float = 1.8
    ph_shift_gas: float = -2.5
    min_buffer_alkalinity: float = 10.0
    ph_bounds: Tuple[float, float] = (2.0, 12.0)

    ct_benchmark: float = 15.0


KEEGAN_2012 = KineticConstants()


# ---------------------------------------------------------
# 3. Baffle factor presets (T10/T)
# ---------------------------------------------------------
BAFFLE_FACTOR_PRESETS: Tuple[Tuple[str, float], ...] = (
    ("Unbaffled (Mixed)", 0.1),
    ("Poor Baffling", 0.3),
    ("Average Baffling", 0.5),
    ("Superior Baffling", 0.7),
    ("Perfect Baffling (Plug Flow)", 1.0),
)
