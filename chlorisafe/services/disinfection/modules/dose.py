# chlorisafe/services/disinfection/modules/dose.py
from __future__ import annotations

from typing import Callable, Dict

from chlorisafe.schemas.common import ChlorineChemical
from chlorisafe.schemas.disinfection import ProcessState
from chlorisafe.services.disinfection.constants import HOURS_PER_DAY, MG_PER_KG_PER_M3
from chlorisafe.services.disinfection.utils import safe_div


def hypochlorite_mass_rate_kgh(dose_rate_lh: float, conc_pct: float) -> float:
    """Active chlorine fed as NaOCl (kg/h). % w/v means kg per 100 L."""
    return dose_rate_lh * conc_pct / 100.0


def mass_rate_to_dose_mgL(mass_rate_kgh: float, flow_m3d: float) -> float:
    """
    (kg/h * 24 h/d * 1000 g/kg) / (m³/d) = g/m³ = mg/L.
    Zero for a non-positive flow.
    """
    return safe_div(mass_rate_kgh * HOURS_PER_DAY * MG_PER_KG_PER_M3, flow_m3d)


def _hypochlorite_dose(state: ProcessState) -> float:
    mass_rate = hypochlorite_mass_rate_kgh(
        state.naocl_dose_rate_lh, state.naocl_conc_pct
    )
    return mass_rate_to_dose_mgL(mass_rate, state.flow_rate_m3d)


def _gas_dose(state: ProcessState) -> float:
    return mass_rate_to_dose_mgL(state.gas_dose_rate_kgh, state.flow_rate_m3d)


DOSE_CALCULATORS: Dict[ChlorineChemical, Callable[[ProcessState], float]] = {
    ChlorineChemical.SODIUM_HYPOCHLORITE: _hypochlorite_dose,
    ChlorineChemical.CHLORINE_GAS: _gas_dose,
}


def chlorine_dose_mgL(state: ProcessState) -> float:
    """Free chlorine dose (mg/L) delivered by the selected chemical feed."""
    return DOSE_CALCULATORS[state.chemical](state)
