# chlorisafe/services/disinfection/modules/turbidity.py
from __future__ import annotations

from dataclasses import dataclass

from chlorisafe.schemas.common import TurbidityLevel


@dataclass(frozen=True)
class LrvSet:
    bacteria_applied: float
    bacteria_effective: float
    virus_applied: float
    virus_effective: float


NO_CREDIT = LrvSet(0.0, 0.0, 0.0, 0.0)


def credits_allowed(turbidity: TurbidityLevel) -> bool:
    """No disinfection credit may be claimed above 1 NTU."""
    return turbidity is not TurbidityLevel.HIGH


def apply_turbidity_gate(lrvs: LrvSet, turbidity: TurbidityLevel) -> LrvSet:
    if credits_allowed(turbidity):
        return lrvs
    return NO_CREDIT
