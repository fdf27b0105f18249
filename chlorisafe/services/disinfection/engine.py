# chlorisafe/services/disinfection/engine.py
# Disinfection calculation pipeline.
#
#   dose -> volume -> retention/T10 -> post-dose pH -> HOCl fraction
#        -> Ct -> bacteria / virus LRV -> turbidity gate
#
# Every stage is a pure function of the ProcessState and earlier stages.
from __future__ import annotations

from loguru import logger

from chlorisafe.schemas.disinfection import (
    CalculationResult,
    DisinfectionReport,
    ProcessState,
)
from chlorisafe.services.disinfection.advisories import UNIT_LABELS, build_warnings
from chlorisafe.services.disinfection.constants import KEEGAN_2012, KineticConstants
from chlorisafe.services.disinfection.modules.chemistry import (
    hocl_fraction,
    post_dose_ph,
)
from chlorisafe.services.disinfection.modules.ct import compute_ct
from chlorisafe.services.disinfection.modules.dose import chlorine_dose_mgL
from chlorisafe.services.disinfection.modules.geometry import basin_volume_m3
from chlorisafe.services.disinfection.modules.inactivation import (
    bacteria_lrv,
    virus_lrv,
)
from chlorisafe.services.disinfection.modules.retention import compute_retention
from chlorisafe.services.disinfection.modules.turbidity import (
    LrvSet,
    apply_turbidity_gate,
    credits_allowed,
)


class DisinfectionEngine:
    def __init__(self, constants: KineticConstants = KEEGAN_2012) -> None:
        self.constants = constants

    def calculate(self, state: ProcessState) -> CalculationResult:
        c = self.constants

        # 1) dose / geometry / contact time
        dose = chlorine_dose_mgL(state)
        volume = basin_volume_m3(state.tank_type, state.dimensions)
        ret = compute_retention(
            volume_m3=volume,
            flow_m3d=state.flow_rate_m3d,
            is_baffled=state.is_baffled,
            baffle_factor=state.baffle_factor,
            constants=c,
        )
        logger.debug(
            "dose={:.4f} mg/L volume={:.3f} m3 T={:.3f} min T10={:.3f} min (bf={})",
            dose,
            volume,
            ret.retention_time_min,
            ret.t10_min,
            ret.baffle_factor,
        )

        # 2) chemistry
        ph_after = post_dose_ph(
            state.ph, dose, state.alkalinity_mgL, state.chemical, c
        )
        f_hocl = hocl_fraction(ph_after, state.temperature_C)

        # 3) Ct
        ct_applied, ct_effective = compute_ct(dose, f_hocl, ret.t10_min)

        # 4) inactivation credits
        raw = LrvSet(
            bacteria_applied=bacteria_lrv(
                ct_applied, state.temperature_C, state.turbidity, c
            ),
            bacteria_effective=bacteria_lrv(
                ct_effective, state.temperature_C, state.turbidity, c
            ),
            virus_applied=virus_lrv(ct_applied, state.temperature_C, c),
            virus_effective=virus_lrv(ct_effective, state.temperature_C, c),
        )
        lrvs = apply_turbidity_gate(raw, state.turbidity)
        logger.debug(
            "pH'={:.3f} HOCl={:.4f} Ct={:.3f}/{:.3f} LRV bac={:.2f}/{:.2f} vir={:.2f}/{:.2f}",
            ph_after,
            f_hocl,
            ct_applied,
            ct_effective,
            lrvs.bacteria_applied,
            lrvs.bacteria_effective,
            lrvs.virus_applied,
            lrvs.virus_effective,
        )

        return CalculationResult(
            chlorine_dose_mgL=dose,
            volume_m3=volume,
            effective_volume_m3=ret.effective_volume_m3,
            retention_time_min=ret.retention_time_min,
            t10_min=ret.t10_min,
            ct_dose=ct_applied,
            effective_ct=ct_effective,
            post_dose_ph=ph_after,
            hocl_fraction=f_hocl,
            lrv_bacteria_applied=lrvs.bacteria_applied,
            lrv_bacteria_effective=lrvs.bacteria_effective,
            lrv_virus_applied=lrvs.virus_applied,
            lrv_virus_effective=lrvs.virus_effective,
        )

    def run(self, state: ProcessState) -> DisinfectionReport:
        """calculate() plus operator advisories and unit labels."""
        results = self.calculate(state)
        warnings = build_warnings(state, results, self.constants)
        if warnings:
            logger.info(
                "Disinfection advisories: {}", ", ".join(w.key for w in warnings)
            )
        return DisinfectionReport(
            inputs=state,
            results=results,
            credits_available=credits_allowed(state.turbidity),
            warnings=warnings,
            unit_labels=dict(UNIT_LABELS),
        )


def calculate_results(
    state: ProcessState, constants: KineticConstants = KEEGAN_2012
) -> CalculationResult:
    return DisinfectionEngine(constants).calculate(state)
