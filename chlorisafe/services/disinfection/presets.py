# chlorisafe/services/disinfection/presets.py
# Input preparation used by the API / CLI before the engine runs.
from __future__ import annotations

import math
from typing import Any, Dict, List

from chlorisafe.schemas.common import (
    ChlorineChemical,
    TankType,
    TurbidityLevel,
)
from chlorisafe.schemas.disinfection import (
    BaffleFactorPreset,
    ProcessState,
    TankDimensions,
)
from chlorisafe.services.disinfection.constants import (
    BAFFLE_FACTOR_PRESETS,
    KEEGAN_2012,
    KineticConstants,
)


def default_process_state() -> ProcessState:
    """Initial form state: 10,000 m³/d through a baffled 300 m³ rectangular tank."""
    return ProcessState(
        flow_rate_m3d=10000.0,
        chemical=ChlorineChemical.SODIUM_HYPOCHLORITE,
        naocl_conc_pct=12.5,
        naocl_dose_rate_lh=5.0,
        gas_dose_rate_kgh=2.0,
        tank_type=TankType.RECTANGULAR,
        dimensions=TankDimensions(length_m=20.0, width_m=5.0, water_depth_m=3.0),
        is_baffled=True,
        baffle_factor=0.5,
        ph=7.5,
        temperature_C=20.0,
        alkalinity_mgL=100.0,
        turbidity=TurbidityLevel.LOW,
    )


def baffle_factor_presets() -> List[BaffleFactorPreset]:
    return [BaffleFactorPreset(label=lbl, value=v) for lbl, v in BAFFLE_FACTOR_PRESETS]


def _non_negative_number(v: float) -> float:
    if math.isnan(v):
        return 0.0
    return max(0.0, v)


def sanitize_process_state(state: ProcessState) -> ProcessState:
    """
    Every numeric input (dimensions included) becomes max(0, value); NaN becomes 0.
    Enums and flags are left alone.
    """
    updates: Dict[str, Any] = {}
    for name, value in state:
        if isinstance(value, float):
            updates[name] = _non_negative_number(value)

    dims = state.dimensions
    updates["dimensions"] = dims.model_copy(
        update={
            name: _non_negative_number(value)
            for name, value in dims
            if isinstance(value, float)
        }
    )
    return state.model_copy(update=updates)


def apply_tank_type(
    state: ProcessState,
    tank_type: TankType,
    constants: KineticConstants = KEEGAN_2012,
) -> ProcessState:
    """
    Switch the tank type. A pipe is close to plug flow, so selecting one
    locks baffling on at the pipe factor (0.9).
    """
    update: Dict[str, Any] = {"tank_type": tank_type}
    if tank_type is TankType.PIPE:
        update["is_baffled"] = True
        update["baffle_factor"] = constants.pipe_baffle_factor
    return state.model_copy(update=update)


def prepare_process_state(
    state: ProcessState, constants: KineticConstants = KEEGAN_2012
) -> ProcessState:
    """Form rules applied to every submitted state: sanitise, then the tank-type lock."""
    clean = sanitize_process_state(state)
    return apply_tank_type(clean, clean.tank_type, constants)
