from __future__ import annotations

import pytest
from pydantic import ValidationError

from agroexpert.models.crops import CropThermalProfile
from agroexpert.models.enums import RiskCodeEnum, RiskLevelEnum
from agroexpert.schemas.analysis import RiskContext
from agroexpert.services import risk_scorer
from agroexpert.services.risk_scorer import RISK_LEVEL_ORDER, RISK_RULES, RiskRule


def _codes(context: dict[str, float], config: CropThermalProfile | None = None) -> list[RiskCodeEnum]:
    return [reason.code for reason in risk_scorer.evaluate(context, config).reasons]


def test_lethal_frost_fires_alone() -> None:
    result = risk_scorer.evaluate({"temp": -5})

    assert [(r.code, r.points) for r in result.reasons] == [(RiskCodeEnum.force_majeure, 40)]
    assert result.score == 40
    assert risk_scorer.get_level(result.score) is RiskLevelEnum.high
    assert result.reasons[0].message == "Severe frost below lethal threshold (-5.0°C <= -4.0°C)"


def test_frost_with_default_lethal_threshold() -> None:
    result = risk_scorer.evaluate({"temp": -1})

    assert [(r.code, r.points) for r in result.reasons] == [(RiskCodeEnum.frost, 25)]
    assert risk_scorer.get_level(result.score) is RiskLevelEnum.medium


def test_root_freeze_compounds_with_frost() -> None:
    result = risk_scorer.evaluate({"temp": -2, "soilTemp": -1, "soilMoisture": 70})

    assert [r.code for r in result.reasons] == [RiskCodeEnum.frost, RiskCodeEnum.root_freeze]
    assert result.score == 55
    assert risk_scorer.get_level(result.score) is RiskLevelEnum.high


def test_drought_only() -> None:
    result = risk_scorer.evaluate({"temp": 20, "soilMoisture": 15})

    assert [(r.code, r.points) for r in result.reasons] == [(RiskCodeEnum.drought, 30)]
    assert risk_scorer.get_level(result.score) is RiskLevelEnum.medium


def test_missing_signals_never_fire() -> None:
    result = risk_scorer.evaluate({"temp": 15})
    assert result.reasons == []
    assert result.score == 0
    assert risk_scorer.get_level(result.score) is RiskLevelEnum.low

    assert risk_scorer.evaluate({}).score == 0
    assert risk_scorer.evaluate(RiskContext()).reasons == []


def test_forecast_minimum_preferred_for_cold_checks() -> None:
    assert _codes({"temp": 8, "minTempForecast": -6}) == [RiskCodeEnum.force_majeure]
    assert _codes({"temp": -6, "minTempForecast": 3}) == []


def test_heat_uses_current_temperature_only() -> None:
    assert _codes({"temp": 36, "minTempForecast": 20}) == [RiskCodeEnum.heat]
    assert _codes({"temp": 35}) == []
    assert _codes({"minTempForecast": 40}) == []


def test_temperature_branch_is_exclusive_and_ordered() -> None:
    # Lethal at +5 and stress below zero: every branch condition matches.
    config = CropThermalProfile(base_temp=5.0, lethal_min=5.0, stress_temp=-10.0)
    assert _codes({"temp": -1}, config) == [RiskCodeEnum.force_majeure]

    config = CropThermalProfile(base_temp=5.0, lethal_min=-20.0, stress_temp=-10.0)
    assert _codes({"temp": -1}, config) == [RiskCodeEnum.frost]


def test_crop_thresholds_drive_lethal_and_heat() -> None:
    corn = CropThermalProfile(base_temp=10.0, lethal_min=-1.0, stress_temp=30.0)
    assert _codes({"temp": -1}, corn) == [RiskCodeEnum.force_majeure]
    assert _codes({"temp": 31}, corn) == [RiskCodeEnum.heat]


@pytest.mark.parametrize(
    "moisture, expected",
    [
        (19.9, [RiskCodeEnum.drought]),
        (20.0, []),
        (85.0, []),
        (85.1, [RiskCodeEnum.root_rot]),
    ],
)
def test_soil_moisture_bounds(moisture: float, expected: list[RiskCodeEnum]) -> None:
    assert _codes({"temp": 15, "soilMoisture": moisture}) == expected


def test_root_freeze_independent_of_air_temperature() -> None:
    assert _codes({"temp": 12, "soilTemp": 0, "soilMoisture": 90}) == [
        RiskCodeEnum.root_rot,
        RiskCodeEnum.root_freeze,
    ]
    assert _codes({"temp": 12, "soilTemp": -3}) == []
    assert _codes({"temp": 12, "soilMoisture": 90, "soilTemp": 0.5}) == [RiskCodeEnum.root_rot]


def test_wind_rule() -> None:
    assert _codes({"temp": 15, "wind": 50}) == []
    result = risk_scorer.evaluate({"temp": 15, "wind": 62.5})
    assert [r.code for r in result.reasons] == [RiskCodeEnum.wind]
    assert result.reasons[0].message == "Storm-force wind (62.5 km/h > 50 km/h)"


def test_score_is_sum_of_breakdown() -> None:
    result = risk_scorer.evaluate(
        {"temp": -5, "soilTemp": -2, "soilMoisture": 90, "wind": 70, "rain": 30}
    )
    assert [r.code for r in result.reasons] == [
        RiskCodeEnum.force_majeure,
        RiskCodeEnum.root_rot,
        RiskCodeEnum.root_freeze,
        RiskCodeEnum.wind,
    ]
    assert result.score == sum(r.points for r in result.reasons) == 110
    assert risk_scorer.get_level(result.score) is RiskLevelEnum.critical


def test_messages_are_deterministic() -> None:
    context = {"temp": -2, "soilTemp": -1, "soilMoisture": 70}
    assert risk_scorer.evaluate(context) == risk_scorer.evaluate(context)


@pytest.mark.parametrize(
    "score, expected",
    [
        (0, RiskLevelEnum.low),
        (19, RiskLevelEnum.low),
        (20, RiskLevelEnum.medium),
        (39, RiskLevelEnum.medium),
        (40, RiskLevelEnum.high),
        (69, RiskLevelEnum.high),
        (70, RiskLevelEnum.critical),
        (500, RiskLevelEnum.critical),
    ],
)
def test_level_boundaries(score: int, expected: RiskLevelEnum) -> None:
    assert risk_scorer.get_level(score) is expected


def test_level_is_monotonic() -> None:
    ranks = [RISK_LEVEL_ORDER.index(risk_scorer.get_level(score)) for score in range(0, 200)]
    assert ranks == sorted(ranks)


def test_extra_rules_are_additive() -> None:
    strong_gusts = RiskRule(
        code=RiskCodeEnum.wind,
        points=5,
        condition=lambda ctx, th: ctx.wind is not None and ctx.wind > 30,
        message=lambda ctx, th: f"Strong gusts ({ctx.wind:.1f} km/h > 30 km/h)",
    )
    result = risk_scorer.evaluate({"temp": 15, "wind": 40}, rules=(*RISK_RULES, strong_gusts))
    assert result.score == 5
    assert result.reasons[0].message == "Strong gusts (40.0 km/h > 30 km/h)"


@pytest.mark.parametrize("moisture", [-1.0, 100.5, 150.0])
def test_out_of_range_soil_moisture_rejected(moisture: float) -> None:
    with pytest.raises(ValidationError):
        risk_scorer.evaluate({"temp": 15, "soilMoisture": moisture})
