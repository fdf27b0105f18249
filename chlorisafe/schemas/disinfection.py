# chlorisafe/schemas/disinfection.py
# =============================================================================
# ChloriSafe Disinfection Schemas (Pydantic v2)
#
# Key Policies:
# - Explicit "null" keys are dropped so the defaults apply.
# - snake_case field names carry units; the camelCase names used by the
#   front-end (flowRate, naOClConc, waterDepth ...) are accepted as aliases.
# - ProcessState / CalculationResult are frozen: one state in, one result out.
# =============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, ConfigDict, Field, model_validator

from .common import AppBaseModel, ChlorineChemical, TankType, TurbidityLevel


# =============================================================================
# Helpers: Treat explicit null as "missing"
# =============================================================================
def _drop_none_recursive(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if v is None:
                continue
            out[k] = _drop_none_recursive(v)
        return out
    if isinstance(obj, list):
        return [_drop_none_recursive(v) for v in obj]
    return obj


def _norm_label(value: Any, enum_cls: type) -> Any:
    """Resolve labels and member names ("pipe", "CHLORINE_GAS") to the enum member."""
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            return value
    return value


_LABELLED_FIELDS = (
    (("chemical",), ChlorineChemical),
    (("tank_type", "tankType"), TankType),
    (("turbidity",), TurbidityLevel),
)


# =============================================================================
# Input Models
# =============================================================================
class TankDimensions(AppBaseModel):
    """Basin dimensions in metres. Only the subset relevant to the tank type is read."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _strip_nulls(cls, data: Any) -> Any:
        return _drop_none_recursive(data) if isinstance(data, dict) else data

    length_m: float = Field(
        default=0.0, validation_alias=AliasChoices("length_m", "length")
    )
    width_m: float = Field(default=0.0, validation_alias=AliasChoices("width_m", "width"))
    diameter_m: float = Field(
        default=0.0, validation_alias=AliasChoices("diameter_m", "diameter")
    )
    water_depth_m: float = Field(
        default=0.0,
        validation_alias=AliasChoices("water_depth_m", "waterDepth", "water_depth"),
    )


class ProcessState(AppBaseModel):
    """
    Process point description supplied by the caller.

    Units:
      flow m³/d, NaOCl strength % w/v, NaOCl feed L/h, gas feed kg/h,
      temperature °C, alkalinity g/m³ as CaCO₃.
    """

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _strip_nulls_and_normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        d = _drop_none_recursive(data)

        for keys, enum_cls in _LABELLED_FIELDS:
            for k in keys:
                if k in d:
                    d[k] = _norm_label(d[k], enum_cls)
        return d

    flow_rate_m3d: float = Field(
        validation_alias=AliasChoices("flow_rate_m3d", "flowRate", "flow_rate"),
        description="Plant flow through the contact basin (m³/d)",
    )

    chemical: ChlorineChemical = ChlorineChemical.SODIUM_HYPOCHLORITE
    naocl_conc_pct: float = Field(
        default=0.0,
        validation_alias=AliasChoices("naocl_conc_pct", "naOClConc", "naoclConc"),
        description="Sodium hypochlorite strength (% w/v)",
    )
    naocl_dose_rate_lh: float = Field(
        default=0.0,
        validation_alias=AliasChoices(
            "naocl_dose_rate_lh", "naOClDoseRate", "naoclDoseRate"
        ),
        description="Sodium hypochlorite feed rate (L/h)",
    )
    gas_dose_rate_kgh: float = Field(
        default=0.0,
        validation_alias=AliasChoices("gas_dose_rate_kgh", "gasDoseRate"),
        description="Chlorine gas feed rate (kg/h)",
    )

    tank_type: TankType = Field(
        default=TankType.RECTANGULAR,
        validation_alias=AliasChoices("tank_type", "tankType"),
    )
    dimensions: TankDimensions = Field(default_factory=TankDimensions)
    is_baffled: bool = Field(
        default=False, validation_alias=AliasChoices("is_baffled", "isBaffled")
    )
    baffle_factor: float = Field(
        default=0.5,
        validation_alias=AliasChoices("baffle_factor", "baffleFactor"),
        description="T10/T ratio used when the basin is baffled",
    )

    ph: float = Field(validation_alias=AliasChoices("ph", "pH"))
    temperature_C: float = Field(
        validation_alias=AliasChoices("temperature_C", "temperature")
    )
    alkalinity_mgL: float = Field(
        validation_alias=AliasChoices("alkalinity_mgL", "alkalinity"),
        description="Alkalinity (g/m³ as CaCO₃)",
    )
    turbidity: TurbidityLevel = TurbidityLevel.LOW


# =============================================================================
# Output Models
# =============================================================================
class CalculationResult(AppBaseModel):
    model_config = ConfigDict(frozen=True)

    chlorine_dose_mgL: float = Field(alias="chlorineDose")
    volume_m3: float = Field(alias="volume")
    effective_volume_m3: float = Field(alias="effectiveVolume")
    retention_time_min: float = Field(alias="retentionTime")
    t10_min: float = Field(alias="t10")
    ct_dose: float = Field(alias="ctDose")
    effective_ct: float = Field(alias="effectiveCt")
    post_dose_ph: float = Field(alias="postDosePh")
    hocl_fraction: float = Field(alias="hoClFraction")
    lrv_bacteria_applied: float = Field(alias="lrvBacteriaApplied")
    lrv_bacteria_effective: float = Field(alias="lrvBacteriaEffective")
    lrv_virus_applied: float = Field(alias="lrvVirusApplied")
    lrv_virus_effective: float = Field(alias="lrvVirusEffective")

    def lrv_values(self) -> List[float]:
        return [
            self.lrv_bacteria_applied,
            self.lrv_bacteria_effective,
            self.lrv_virus_applied,
            self.lrv_virus_effective,
        ]


class DisinfectionWarning(AppBaseModel):
    key: str
    message: str
    value: Optional[float] = None
    limit: Optional[float] = None
    unit: str = ""
    level: Literal["INFO", "WARN", "ERROR"] = "WARN"


class BaffleFactorPreset(AppBaseModel):
    label: str
    value: float


class DisinfectionReport(AppBaseModel):
    inputs: ProcessState
    results: CalculationResult
    credits_available: bool
    warnings: List[DisinfectionWarning] = Field(default_factory=list)
    unit_labels: Dict[str, str] = Field(default_factory=dict)

    schema_version: int = 1
