"""Pydantic schemas for the expert engine's input and output payloads."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from agroexpert.models.enums import (
	AlertSeverityEnum,
	GrowthStateEnum,
	RiskCodeEnum,
	RiskLevelEnum,
)


class _Reading(BaseModel):
	model_config = ConfigDict(allow_inf_nan=False, populate_by_name=True, extra="ignore")


# ── Engine input ────────────────────────────────────────────────────────────


class WeatherReading(_Reading):
	temp: float
	hum: float | None = None
	wind: float | None = None
	rain: float | None = None


class ForecastReading(_Reading):
	min_temp: float | None = Field(default=None, validation_alias=AliasChoices("min_temp", "minTemp"))
	max_temp: float | None = Field(default=None, validation_alias=AliasChoices("max_temp", "maxTemp"))


class SoilReading(_Reading):
	temp: float | None = None
	moisture: float | None = Field(default=None, ge=0.0, le=100.0)


class ExpertInput(_Reading):
	crop: str | None = None
	weather: WeatherReading
	forecast: ForecastReading = Field(default_factory=ForecastReading)
	soil: SoilReading = Field(default_factory=SoilReading)

	@field_validator("forecast", "soil", mode="before")
	@classmethod
	def _absent_record_is_empty(cls, value: object) -> object:
		# A null forecast or soil record means the signal is unavailable.
		return {} if value is None else value


class CropConfigOverrides(_Reading):
	"""Partial per-farm profile; only supplied fields replace the defaults."""

	base_temp: float | None = Field(default=None, validation_alias=AliasChoices("base_temp", "baseTemp"))
	lethal_min: float | None = Field(default=None, validation_alias=AliasChoices("lethal_min", "lethalMin"))
	stress_temp: float | None = Field(default=None, validation_alias=AliasChoices("stress_temp", "stressTemp"))


# ── Risk scoring ────────────────────────────────────────────────────────────


class RiskContext(_Reading):
	temp: float | None = None
	min_temp_forecast: float | None = Field(
		default=None,
		validation_alias=AliasChoices("min_temp_forecast", "minTempForecast"),
	)
	soil_temp: float | None = Field(default=None, validation_alias=AliasChoices("soil_temp", "soilTemp"))
	soil_moisture: float | None = Field(
		default=None,
		ge=0.0,
		le=100.0,
		validation_alias=AliasChoices("soil_moisture", "soilMoisture"),
	)
	wind: float | None = None
	rain: float | None = None


class RiskRuleResult(BaseModel):
	code: RiskCodeEnum
	message: str
	points: int = Field(ge=0)


class RiskEvaluation(BaseModel):
	score: int = 0
	reasons: list[RiskRuleResult] = Field(default_factory=list)


# ── Engine output ───────────────────────────────────────────────────────────


class Alert(BaseModel):
	level: AlertSeverityEnum
	code: RiskCodeEnum
	message: str


class AnalysisDetails(BaseModel):
	gdd: float
	growth_state: GrowthStateEnum
	breakdown: list[RiskRuleResult] = Field(default_factory=list)


class AnalysisResult(BaseModel):
	summary: str
	risk_level: RiskLevelEnum
	risk_score: int = Field(ge=0)
	alerts: list[Alert] = Field(default_factory=list)
	actions: list[str] = Field(default_factory=list)
	details: AnalysisDetails
