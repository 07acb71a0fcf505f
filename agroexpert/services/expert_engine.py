"""Expert engine — combines phenology and risk scoring into an advisory payload."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from agroexpert.config import Settings, get_settings
from agroexpert.logging_config import get_logger
from agroexpert.models.enums import (
	AlertSeverityEnum,
	GrowthStateEnum,
	RiskCodeEnum,
	RiskLevelEnum,
)
from agroexpert.schemas.analysis import (
	Alert,
	AnalysisDetails,
	AnalysisResult,
	CropConfigOverrides,
	ExpertInput,
	RiskContext,
	RiskRuleResult,
)
from agroexpert.services import phenology, risk_scorer

_logger = get_logger("engine")

CRITICAL_ALERT_POINTS = 30

ACTION_IRRIGATE = "IRRIGATION: Soil is very dry, schedule irrigation urgently."
ACTION_FROST_PROTECTION = "FROST PROTECTION: Prepare row covers, sprinklers or wind machines."
ACTION_STOP_IRRIGATION = "STOP IRRIGATION: Excess soil moisture, root rot risk."
ACTION_FEED = "FERTILIZATION: Growth is active, feeding can proceed."
ACTION_HOLD_FEED = "FERTILIZATION: Growth has stalled, feeding is not recommended."

# Codes missing here produce an alert but no action.
RISK_ACTIONS: Mapping[RiskCodeEnum, str] = MappingProxyType(
	{
		RiskCodeEnum.drought: ACTION_IRRIGATE,
		RiskCodeEnum.frost: ACTION_FROST_PROTECTION,
		RiskCodeEnum.force_majeure: ACTION_FROST_PROTECTION,
		RiskCodeEnum.root_rot: ACTION_STOP_IRRIGATION,
	}
)

FEEDING_ACTIONS: Mapping[GrowthStateEnum, str] = MappingProxyType(
	{
		GrowthStateEnum.normal: ACTION_FEED,
		GrowthStateEnum.fast: ACTION_FEED,
		GrowthStateEnum.stalled: ACTION_HOLD_FEED,
	}
)

_CALM_LEVELS = frozenset({RiskLevelEnum.low, RiskLevelEnum.medium})


def alert_severity(points: int) -> AlertSeverityEnum:
	return AlertSeverityEnum.critical if points >= CRITICAL_ALERT_POINTS else AlertSeverityEnum.warning


def build_alerts(reasons: Iterable[RiskRuleResult]) -> list[Alert]:
	return [
		Alert(
			level=alert_severity(reason.points),
			code=reason.code,
			message=f"{reason.message} (impact: +{reason.points})",
		)
		for reason in reasons
	]


def map_actions(reasons: Iterable[RiskRuleResult]) -> list[str]:
	"""Recommended actions for the triggered reasons, deduplicated in first-seen order."""
	actions = (RISK_ACTIONS.get(reason.code) for reason in reasons)
	return list(dict.fromkeys(action for action in actions if action is not None))


def lead_clause(message: str) -> str:
	"""Text of a rule message before its parenthetical detail."""
	return message.split("(", 1)[0].strip()


def compose_summary(
	growth_state: GrowthStateEnum,
	gdd: float,
	score: int,
	level: RiskLevelEnum,
	reasons: Iterable[RiskRuleResult],
) -> str:
	summary = (
		"Analysis based on current readings and phenology rules. "
		f"Growth state: {growth_state.value} (GDD: {gdd:.1f}). "
	)
	if level in _CALM_LEVELS:
		return summary + f"Risk score {score} ({level.value}), conditions stable."

	threats = ", ".join(lead_clause(reason.message) for reason in reasons)
	return summary + f"WARNING: total risk score {score} ({level.value}). Main threats: {threats}."


class ExpertEngine:
	"""Stateless orchestrator; safe to share between concurrent callers."""

	def __init__(self, settings: Settings | None = None):
		self.settings = settings or get_settings()

	def analyze(
		self,
		data: ExpertInput | Mapping[str, Any],
		overrides: CropConfigOverrides | Mapping[str, Any] | None = None,
	) -> AnalysisResult:
		"""Produce the full advisory payload for one farm snapshot.

		Raises ``pydantic.ValidationError`` when ``data.weather`` (or its
		``temp``) is missing or any reading is non-finite.
		"""
		payload = data if isinstance(data, ExpertInput) else ExpertInput.model_validate(data)
		if overrides is not None and not isinstance(overrides, CropConfigOverrides):
			overrides = CropConfigOverrides.model_validate(overrides)

		crop = payload.crop or self.settings.default_crop
		config = phenology.resolve_crop_config(crop, overrides)

		weather = payload.weather
		forecast_min = payload.forecast.min_temp
		gdd = phenology.calculate_gdd(
			weather.temp,
			forecast_min if forecast_min is not None else weather.temp,
			crop,
			base_temp=config.base_temp,
		)
		growth_state = phenology.get_growth_status(gdd)

		context = RiskContext(
			temp=weather.temp,
			min_temp_forecast=forecast_min,
			soil_temp=payload.soil.temp,
			soil_moisture=payload.soil.moisture,
			wind=weather.wind,
			rain=weather.rain,
		)
		evaluation = risk_scorer.evaluate(context, config)
		level = risk_scorer.get_level(evaluation.score)

		actions = map_actions(evaluation.reasons)
		if level in _CALM_LEVELS:
			feeding = FEEDING_ACTIONS.get(growth_state)
			if feeding is not None and feeding not in actions:
				actions.append(feeding)

		_logger.info(
			"expert_analysis_completed",
			crop=crop,
			gdd=round(gdd, 2),
			growth_state=growth_state.value,
			risk_score=evaluation.score,
			risk_level=level.value,
			rule_codes=[reason.code.value for reason in evaluation.reasons],
		)

		return AnalysisResult(
			summary=compose_summary(growth_state, gdd, evaluation.score, level, evaluation.reasons),
			risk_level=level,
			risk_score=evaluation.score,
			alerts=build_alerts(evaluation.reasons),
			actions=actions,
			details=AnalysisDetails(
				gdd=gdd,
				growth_state=growth_state,
				breakdown=evaluation.reasons,
			),
		)
