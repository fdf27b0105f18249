# tests/modules_test.py
# pytest unit tests for the individual pipeline stages
# (services/disinfection/modules/*)

from __future__ import annotations

import dataclasses
import math

import pytest

from chlorisafe.schemas.common import ChlorineChemical, TankType, TurbidityLevel
from chlorisafe.schemas.disinfection import ProcessState, TankDimensions
from chlorisafe.services.disinfection.constants import KEEGAN_2012
from chlorisafe.services.disinfection.modules.chemistry import (
    hocl_fraction,
    hocl_pka,
    post_dose_ph,
)
from chlorisafe.services.disinfection.modules.ct import compute_ct
from chlorisafe.services.disinfection.modules.dose import (
    DOSE_CALCULATORS,
    chlorine_dose_mgL,
    hypochlorite_mass_rate_kgh,
)
from chlorisafe.services.disinfection.modules.geometry import (
    GEOMETRIES,
    UnsupportedTankTypeError,
    basin_volume_m3,
)
from chlorisafe.services.disinfection.modules.inactivation import (
    bacteria_lrv,
    interpolate_lrv,
    virus_lrv,
)
from chlorisafe.services.disinfection.modules.retention import compute_retention
from chlorisafe.services.disinfection.modules.turbidity import (
    NO_CREDIT,
    LrvSet,
    apply_turbidity_gate,
)

C = KEEGAN_2012


# -----------------------------------------------------------------------------
# helpers
# -----------------------------------------------------------------------------
def state(**kwargs) -> ProcessState:
    base = dict(
        flow_rate_m3d=10000.0,
        naocl_conc_pct=12.5,
        naocl_dose_rate_lh=5.0,
        gas_dose_rate_kgh=2.0,
        ph=7.5,
        temperature_C=20.0,
        alkalinity_mgL=100.0,
    )
    base.update(kwargs)
    return ProcessState(**base)


# -----------------------------------------------------------------------------
# 1) dose
# -----------------------------------------------------------------------------
def test_hypochlorite_mass_rate_is_percent_w_v():
    # 5 L/h of 12.5 % w/v -> 0.625 kg/h
    assert hypochlorite_mass_rate_kgh(5.0, 12.5) == pytest.approx(0.625, rel=0, abs=1e-12)


def test_dose_sodium_hypochlorite():
    s = state(chemical=ChlorineChemical.SODIUM_HYPOCHLORITE)
    # 0.625 kg/h * 24 * 1000 / 10000 m3/d
    assert chlorine_dose_mgL(s) == pytest.approx(1.5, rel=0, abs=1e-12)


def test_dose_chlorine_gas_ignores_hypochlorite_fields():
    s = state(chemical=ChlorineChemical.CHLORINE_GAS, naocl_dose_rate_lh=999.0)
    assert chlorine_dose_mgL(s) == pytest.approx(4.8, rel=0, abs=1e-12)


@pytest.mark.parametrize("chemical", list(ChlorineChemical))
@pytest.mark.parametrize("flow", [0.0, -100.0])
def test_dose_is_zero_without_flow(chemical, flow):
    d = chlorine_dose_mgL(state(chemical=chemical, flow_rate_m3d=flow))
    assert d == 0.0
    assert math.isfinite(d)


def test_dose_registry_covers_every_chemical():
    assert set(DOSE_CALCULATORS) == set(ChlorineChemical)


# -----------------------------------------------------------------------------
# 2) geometry
# -----------------------------------------------------------------------------
def test_geometry_registry_covers_every_tank_type():
    assert set(GEOMETRIES) == set(TankType)


def test_volume_pipe_reads_only_diameter_and_length():
    dims = TankDimensions(diameter_m=0.5, length_m=10.0, width_m=123.0, water_depth_m=77.0)
    expected = math.pi * 0.25**2 * 10.0
    assert basin_volume_m3(TankType.PIPE, dims) == pytest.approx(expected, rel=1e-12)


def test_volume_circular_tank():
    dims = TankDimensions(diameter_m=4.0, water_depth_m=3.0, length_m=50.0)
    assert basin_volume_m3(TankType.CIRCULAR, dims) == pytest.approx(12.0 * math.pi, rel=1e-12)


@pytest.mark.parametrize(
    "tank_type, dims, expected",
    [
        (TankType.RECTANGULAR, TankDimensions(length_m=20, width_m=5, water_depth_m=3), 300.0),
        (TankType.SQUARE, TankDimensions(length_m=4, width_m=4, water_depth_m=2), 32.0),
        # square uses length x width as given
        (TankType.SQUARE, TankDimensions(length_m=4, width_m=3, water_depth_m=2), 24.0),
    ],
)
def test_volume_box_tanks(tank_type, dims, expected):
    assert basin_volume_m3(tank_type, dims) == pytest.approx(expected, rel=0, abs=1e-12)


@pytest.mark.parametrize("tank_type", list(TankType))
def test_negative_dimensions_are_clamped(tank_type):
    dims = TankDimensions(length_m=-5, width_m=-5, diameter_m=-2, water_depth_m=-3)
    assert basin_volume_m3(tank_type, dims) == 0.0


def test_unregistered_tank_type_raises():
    with pytest.raises(UnsupportedTankTypeError) as ei:
        basin_volume_m3("Triangular Tank", TankDimensions(length_m=1))  # type: ignore[arg-type]
    assert isinstance(ei.value, ValueError)
    assert "Triangular Tank" in str(ei.value)


# -----------------------------------------------------------------------------
# 3) retention / T10
# -----------------------------------------------------------------------------
def test_retention_baffled():
    r = compute_retention(300.0, 10000.0, True, 0.5, C)
    assert r.retention_time_min == pytest.approx(43.2, rel=0, abs=1e-9)
    assert r.t10_min == pytest.approx(21.6, rel=0, abs=1e-9)
    assert r.effective_volume_m3 == pytest.approx(150.0, rel=0, abs=1e-9)


def test_retention_unbaffled_uses_mixed_fallback():
    r = compute_retention(300.0, 10000.0, False, 0.9, C)
    assert r.baffle_factor == C.unbaffled_factor == 0.1
    assert r.t10_min == pytest.approx(4.32, rel=0, abs=1e-9)
    assert r.effective_volume_m3 == pytest.approx(30.0, rel=0, abs=1e-9)


@pytest.mark.parametrize("volume, flow", [(0.0, 10000.0), (300.0, 0.0), (300.0, -5.0)])
def test_retention_degenerate_is_zero(volume, flow):
    r = compute_retention(volume, flow, True, 0.5, C)
    assert r.retention_time_min == 0.0
    assert r.t10_min == 0.0


def test_retention_negative_baffle_factor_clamped():
    r = compute_retention(300.0, 10000.0, True, -0.3, C)
    assert r.baffle_factor == 0.0
    assert r.t10_min == 0.0


# -----------------------------------------------------------------------------
# 4) post-dose pH / HOCl fraction
# -----------------------------------------------------------------------------
def test_post_dose_ph_hypochlorite_raises_ph():
    assert post_dose_ph(7.5, 1.5, 100.0, ChlorineChemical.SODIUM_HYPOCHLORITE, C) == pytest.approx(
        7.527, rel=0, abs=1e-12
    )


def test_post_dose_ph_gas_lowers_ph_with_alkalinity_floor():
    # alkalinity 5 -> buffer floor 10
    assert post_dose_ph(7.0, 4.0, 5.0, ChlorineChemical.CHLORINE_GAS, C) == pytest.approx(
        6.0, rel=0, abs=1e-12
    )


def test_post_dose_ph_clamped():
    assert post_dose_ph(7.0, 100.0, 0.0, ChlorineChemical.CHLORINE_GAS, C) == 2.0
    assert post_dose_ph(7.0, 100.0, 0.0, ChlorineChemical.SODIUM_HYPOCHLORITE, C) == 12.0


def test_hocl_pka_morris():
    t_k = 293.15
    assert hocl_pka(20.0) == pytest.approx(3000.0 / t_k - 10.0686 + 0.0253 * t_k, rel=1e-12)
    assert hocl_pka(20.0) == pytest.approx(7.5818, rel=0, abs=1e-3)


def test_hocl_fraction_half_at_pka():
    pka = hocl_pka(15.0)
    assert hocl_fraction(pka, 15.0) == pytest.approx(0.5, rel=1e-12)


def test_hocl_fraction_decreases_with_ph():
    values = [hocl_fraction(ph / 10.0, 20.0) for ph in range(20, 121, 5)]
    assert all(0.0 < v < 1.0 for v in values)
    assert all(a > b for a, b in zip(values, values[1:]))


def test_hocl_fraction_finite_for_absolute_zero():
    f = hocl_fraction(7.0, -273.15)
    assert 0.0 < f < 1.0


@pytest.mark.parametrize("temp_C", [-250.0, -200.0, -100.0, 150.0, 1000.0])
@pytest.mark.parametrize("ph", [2.0, 7.0, 12.0])
def test_hocl_fraction_strictly_inside_unit_interval(ph, temp_C):
    assert 0.0 < hocl_fraction(ph, temp_C) < 1.0


# -----------------------------------------------------------------------------
# 5) Ct
# -----------------------------------------------------------------------------
def test_compute_ct():
    applied, effective = compute_ct(1.5, 0.5, 21.6)
    assert applied == pytest.approx(32.4, rel=0, abs=1e-12)
    assert effective == pytest.approx(16.2, rel=0, abs=1e-12)


def test_compute_ct_never_negative():
    assert compute_ct(-1.0, 0.5, 10.0) == (0.0, 0.0)


# -----------------------------------------------------------------------------
# 6) inactivation
# -----------------------------------------------------------------------------
@pytest.mark.parametrize(
    "ct20, expected",
    [
        (-1.0, 0.0),
        (0.0, 0.0),
        (0.5, 1.0),
        (1.0, 2.0),
        (1.5, 2.5),
        (2.0, 3.0),
        (2.5, 3.5),
        (3.0, 4.0),
        (4.0, 5.0),  # extrapolated, not capped
    ],
)
def test_interpolate_virus_table(ct20, expected):
    assert interpolate_lrv(ct20, C.virus_breakpoints) == pytest.approx(expected, rel=0, abs=1e-12)


def test_interpolate_custom_table():
    table = ((0.0, 0.0), (2.0, 1.0), (4.0, 4.0))
    assert interpolate_lrv(1.0, table) == pytest.approx(0.5)
    assert interpolate_lrv(3.0, table) == pytest.approx(2.5)
    assert interpolate_lrv(6.0, table) == pytest.approx(7.0)


def test_virus_lrv_temperature_normalisation():
    lrv = virus_lrv(1.0, 30.0, C)
    assert lrv == pytest.approx(2.0 + (1.07**10 - 1.0), rel=1e-12)


def test_virus_lrv_capped():
    assert virus_lrv(10.0, 20.0, C) == 4.0
    assert virus_lrv(-3.0, 20.0, C) == 0.0


@pytest.mark.parametrize(
    "turbidity, expected",
    [
        (TurbidityLevel.LOW, 0.46),
        (TurbidityLevel.MID, 0.368),
        (TurbidityLevel.HIGH, 0.23),
    ],
)
def test_bacteria_lrv_turbidity_shielding(turbidity, expected):
    assert bacteria_lrv(0.1, 20.0, turbidity, C) == pytest.approx(expected, rel=0, abs=1e-12)


def test_bacteria_lrv_temperature_correction():
    assert bacteria_lrv(0.1, 10.0, TurbidityLevel.LOW, C) == pytest.approx(
        0.46 * 1.07 ** (-10), rel=1e-12
    )


def test_bacteria_lrv_capped():
    assert bacteria_lrv(1.0, 20.0, TurbidityLevel.LOW, C) == 4.0
    assert bacteria_lrv(-1.0, 20.0, TurbidityLevel.LOW, C) == 0.0


# -----------------------------------------------------------------------------
# 7) turbidity gate
# -----------------------------------------------------------------------------
def test_turbidity_gate_high_zeroes_everything():
    assert apply_turbidity_gate(LrvSet(1.0, 2.0, 3.0, 4.0), TurbidityLevel.HIGH) == NO_CREDIT


@pytest.mark.parametrize("turbidity", [TurbidityLevel.LOW, TurbidityLevel.MID])
def test_turbidity_gate_passes_low_and_mid(turbidity):
    lrvs = LrvSet(1.0, 2.0, 3.0, 4.0)
    assert apply_turbidity_gate(lrvs, turbidity) is lrvs


# -----------------------------------------------------------------------------
# 8) constants table
# -----------------------------------------------------------------------------
def test_constants_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        C.k_bacteria = 1.0  # type: ignore[misc]
    with pytest.raises(TypeError):
        C.turbidity_factors[TurbidityLevel.LOW] = 0.1  # type: ignore[index]


def test_constants_table_values():
    assert C.k_bacteria == 4.6
    assert C.theta == 1.07
    assert dict(C.turbidity_factors) == {
        TurbidityLevel.LOW: 1.0,
        TurbidityLevel.MID: 0.8,
        TurbidityLevel.HIGH: 0.5,
    }
    xs = [x for x, _ in C.virus_breakpoints]
    assert xs == sorted(xs)
