# chlorisafe/services/disinfection/advisories.py
from __future__ import annotations

from typing import Dict, List

from chlorisafe.schemas.common import TurbidityLevel
from chlorisafe.schemas.disinfection import (
    CalculationResult,
    DisinfectionWarning,
    ProcessState,
)
from chlorisafe.services.disinfection.constants import KineticConstants

CT_UNIT = "mg·min/L"

_FIELD_UNITS: Dict[str, str] = {
    "chlorine_dose_mgL": "mg/L",
    "volume_m3": "m³",
    "effective_volume_m3": "m³",
    "retention_time_min": "min",
    "t10_min": "min",
    "ct_dose": CT_UNIT,
    "effective_ct": CT_UNIT,
    "post_dose_ph": "",
    "hocl_fraction": "",
    "lrv_bacteria_applied": "log10",
    "lrv_bacteria_effective": "log10",
    "lrv_virus_applied": "log10",
    "lrv_virus_effective": "log10",
}

# keyed like the serialised results (chlorineDose, ctDose ...)
UNIT_LABELS: Dict[str, str] = {
    CalculationResult.model_fields[name].alias or name: unit
    for name, unit in _FIELD_UNITS.items()
}


def build_warnings(
    state: ProcessState, results: CalculationResult, constants: KineticConstants
) -> List[DisinfectionWarning]:
    """Operator advisories for a computed process point."""
    warnings: List[DisinfectionWarning] = []

    if state.turbidity is TurbidityLevel.HIGH:
        warnings.append(
            DisinfectionWarning(
                key="turbidity_high_no_credit",
                message="No LRV credits can be claimed when turbidity exceeds 1 NTU.",
                level="ERROR",
            )
        )
    elif state.turbidity is TurbidityLevel.MID:
        warnings.append(
            DisinfectionWarning(
                key="turbidity_mid_filtration",
                message=(
                    "Ct is not impacted at this turbidity, but it indicates less "
                    "effective media filtration; other pathogens may present a risk "
                    "to public health."
                ),
                level="WARN",
            )
        )

    for key, label, value in (
        ("ct_applied_below_benchmark", "Applied Ct", results.ct_dose),
        ("ct_effective_below_benchmark", "Effective Ct", results.effective_ct),
    ):
        if value < constants.ct_benchmark:
            warnings.append(
                DisinfectionWarning(
                    key=key,
                    message=f"{label} is below the {constants.ct_benchmark:g} {CT_UNIT} benchmark.",
                    value=value,
                    limit=constants.ct_benchmark,
                    unit=CT_UNIT,
                    level="WARN",
                )
            )

    if not state.is_baffled:
        warnings.append(
            DisinfectionWarning(
                key="unbaffled_fallback",
                message="Basin is not baffled; the fully mixed T10/T factor is applied.",
                value=constants.unbaffled_factor,
                level="INFO",
            )
        )

    return warnings
