# chlorisafe/schemas/common.py
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class AppBaseModel(BaseModel):
    """Parent of every schema: pydantic v2 settings."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        from_attributes=True,
    )


class LabelledEnum(str, Enum):
    """
    str Enum whose value is the display label.
    Lookup also accepts the member name, case-insensitive ("pipe", "SODIUM_HYPOCHLORITE").
    """

    @classmethod
    def _missing_(cls, value: Any):
        if not isinstance(value, str):
            return None
        key = value.strip()
        for member in cls:
            if key.upper() == member.name or key.lower() == member.value.lower():
                return member
        return None


class ChlorineChemical(LabelledEnum):
    SODIUM_HYPOCHLORITE = "Sodium Hypochlorite"
    CHLORINE_GAS = "Chlorine Gas"


class TankType(LabelledEnum):
    PIPE = "Pipe"
    CIRCULAR = "Circular Tank"
    RECTANGULAR = "Rectangular Tank"
    SQUARE = "Square Tank"


class TurbidityLevel(LabelledEnum):
    LOW = "< 0.2 NTU"
    MID = "> 0.2 to < 1 NTU"
    HIGH = "> 1 NTU"
