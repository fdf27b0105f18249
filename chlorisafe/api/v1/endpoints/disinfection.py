# chlorisafe/api/v1/endpoints/disinfection.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter
from loguru import logger

from chlorisafe.schemas.disinfection import (
    BaffleFactorPreset,
    DisinfectionReport,
    ProcessState,
)
from chlorisafe.services.disinfection.engine import DisinfectionEngine
from chlorisafe.services.disinfection.presets import (
    baffle_factor_presets,
    default_process_state,
    prepare_process_state,
)

router = APIRouter()


@router.post("/calculate", response_model=DisinfectionReport)
def calculate(state: ProcessState) -> DisinfectionReport:
    """
    Run the disinfection engine for one process point.
    Negative / NaN numeric inputs are clamped to 0 and a pipe is locked to
    baffled at the pipe factor before the calculation.
    """
    clean = prepare_process_state(state)
    logger.info(
        "Disinfection calculate: {} / {} / turbidity {}",
        clean.chemical.value,
        clean.tank_type.value,
        clean.turbidity.value,
    )
    # UnsupportedTankTypeError (ValueError) -> 400 via the global handler
    return DisinfectionEngine().run(clean)


@router.get("/defaults", response_model=ProcessState)
def defaults() -> ProcessState:
    return default_process_state()


@router.get("/baffle-factors", response_model=List[BaffleFactorPreset])
def baffle_factors() -> List[BaffleFactorPreset]:
    return baffle_factor_presets()
