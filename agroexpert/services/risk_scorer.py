"""Deterministic, additive risk scoring over a normalized sensor/weather context.

Rules are evaluated in declaration order. Rules sharing an exclusivity
``group`` behave as an if/elif chain: once one fires, the rest of the group
is skipped. Ungrouped rules are independent and always checked.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from agroexpert.models.crops import CropThermalProfile
from agroexpert.models.enums import RiskCodeEnum, RiskLevelEnum
from agroexpert.schemas.analysis import RiskContext, RiskEvaluation, RiskRuleResult

DEFAULT_LETHAL_MIN = -4.0
DEFAULT_STRESS_TEMP = 35.0
FROST_THRESHOLD = 0.0
DROUGHT_MOISTURE = 20.0
WATERLOGGED_MOISTURE = 85.0
ROOT_FREEZE_SOIL_TEMP = 0.0
ROOT_FREEZE_MOISTURE = 60.0
STORM_WIND_KMH = 50.0

RISK_LEVEL_ORDER: tuple[RiskLevelEnum, ...] = (
	RiskLevelEnum.low,
	RiskLevelEnum.medium,
	RiskLevelEnum.high,
	RiskLevelEnum.critical,
)

# Lower bounds, highest first.
_LEVEL_FLOORS: tuple[tuple[int, RiskLevelEnum], ...] = (
	(70, RiskLevelEnum.critical),
	(40, RiskLevelEnum.high),
	(20, RiskLevelEnum.medium),
)


@dataclass(frozen=True)
class Thresholds:
	lethal_min: float
	stress_temp: float


@dataclass(frozen=True)
class RiskRule:
	code: RiskCodeEnum
	points: int
	condition: Callable[[RiskContext, Thresholds], bool]
	message: Callable[[RiskContext, Thresholds], str]
	group: str | None = None


def _cold_reading(ctx: RiskContext) -> float | None:
	"""Forecast minimum when known, otherwise the current air temperature."""
	return ctx.min_temp_forecast if ctx.min_temp_forecast is not None else ctx.temp


def _is_lethal(ctx: RiskContext, th: Thresholds) -> bool:
	t = _cold_reading(ctx)
	return t is not None and t <= th.lethal_min


def _is_frost(ctx: RiskContext, th: Thresholds) -> bool:
	t = _cold_reading(ctx)
	return t is not None and t <= FROST_THRESHOLD


def _is_heat(ctx: RiskContext, th: Thresholds) -> bool:
	return ctx.temp is not None and ctx.temp > th.stress_temp


def _is_drought(ctx: RiskContext, th: Thresholds) -> bool:
	return ctx.soil_moisture is not None and ctx.soil_moisture < DROUGHT_MOISTURE


def _is_waterlogged(ctx: RiskContext, th: Thresholds) -> bool:
	return ctx.soil_moisture is not None and ctx.soil_moisture > WATERLOGGED_MOISTURE


def _is_root_freeze(ctx: RiskContext, th: Thresholds) -> bool:
	return (
		ctx.soil_temp is not None
		and ctx.soil_temp <= ROOT_FREEZE_SOIL_TEMP
		and ctx.soil_moisture is not None
		and ctx.soil_moisture > ROOT_FREEZE_MOISTURE
	)


def _is_storm(ctx: RiskContext, th: Thresholds) -> bool:
	return ctx.wind is not None and ctx.wind > STORM_WIND_KMH


RISK_RULES: tuple[RiskRule, ...] = (
	RiskRule(
		code=RiskCodeEnum.force_majeure,
		points=40,
		group="temperature",
		condition=_is_lethal,
		message=lambda ctx, th: (
			f"Severe frost below lethal threshold ({_cold_reading(ctx):.1f}°C <= {th.lethal_min:.1f}°C)"
		),
	),
	RiskRule(
		code=RiskCodeEnum.frost,
		points=25,
		group="temperature",
		condition=_is_frost,
		message=lambda ctx, th: f"Frost risk ({_cold_reading(ctx):.1f}°C <= {FROST_THRESHOLD:.1f}°C)",
	),
	RiskRule(
		code=RiskCodeEnum.heat,
		points=15,
		group="temperature",
		condition=_is_heat,
		message=lambda ctx, th: f"Heat stress ({ctx.temp:.1f}°C > {th.stress_temp:.1f}°C)",
	),
	RiskRule(
		code=RiskCodeEnum.drought,
		points=30,
		group="soil_moisture",
		condition=_is_drought,
		message=lambda ctx, th: (
			f"Critical soil dryness ({ctx.soil_moisture:.1f}% < {DROUGHT_MOISTURE:.0f}%)"
		),
	),
	RiskRule(
		code=RiskCodeEnum.root_rot,
		points=20,
		group="soil_moisture",
		condition=_is_waterlogged,
		message=lambda ctx, th: (
			f"Root rot risk from overwatering ({ctx.soil_moisture:.1f}% > {WATERLOGGED_MOISTURE:.0f}%)"
		),
	),
	RiskRule(
		code=RiskCodeEnum.root_freeze,
		points=30,
		condition=_is_root_freeze,
		message=lambda ctx, th: (
			f"Root freeze risk in wet frozen soil (soil {ctx.soil_temp:.1f}°C, moisture {ctx.soil_moisture:.1f}%)"
		),
	),
	RiskRule(
		code=RiskCodeEnum.wind,
		points=20,
		condition=_is_storm,
		message=lambda ctx, th: f"Storm-force wind ({ctx.wind:.1f} km/h > {STORM_WIND_KMH:.0f} km/h)",
	),
)


def resolve_thresholds(config: CropThermalProfile | None = None) -> Thresholds:
	lethal_min = config.lethal_min if config is not None else None
	stress_temp = config.stress_temp if config is not None else None
	return Thresholds(
		lethal_min=DEFAULT_LETHAL_MIN if lethal_min is None else lethal_min,
		stress_temp=DEFAULT_STRESS_TEMP if stress_temp is None else stress_temp,
	)


def evaluate(
	context: RiskContext | Mapping[str, Any],
	config: CropThermalProfile | None = None,
	rules: tuple[RiskRule, ...] = RISK_RULES,
) -> RiskEvaluation:
	"""Run every applicable rule and sum the points of those that fire.

	Missing context fields never trigger their rule.
	"""
	ctx = context if isinstance(context, RiskContext) else RiskContext.model_validate(context)
	thresholds = resolve_thresholds(config)

	reasons: list[RiskRuleResult] = []
	closed_groups: set[str] = set()
	for rule in rules:
		if rule.group is not None and rule.group in closed_groups:
			continue
		if not rule.condition(ctx, thresholds):
			continue
		reasons.append(
			RiskRuleResult(code=rule.code, message=rule.message(ctx, thresholds), points=rule.points)
		)
		if rule.group is not None:
			closed_groups.add(rule.group)

	return RiskEvaluation(score=sum(reason.points for reason in reasons), reasons=reasons)


def get_level(score: int) -> RiskLevelEnum:
	for floor, level in _LEVEL_FLOORS:
		if score >= floor:
			return level
	return RiskLevelEnum.low
