"""Pydantic schemas for the spraying-suitability weather check."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from agroexpert.models.enums import FrostSeverityEnum


class WeatherSnapshot(BaseModel):
	model_config = ConfigDict(allow_inf_nan=False)

	temperature: float | None = None
	humidity: float | None = None
	wind_speed: float | None = None
	# Provider phenomenon code; codes containing "Y" or equal to "K" denote precipitation.
	condition_code: str | None = None
	is_raining: bool = False


class WeatherRiskReport(BaseModel):
	frost_risk: bool = False
	frost_severity: FrostSeverityEnum | None = None
	wind_risk: bool = False
	spraying_suitable: bool | None = None
	spraying_blockers: list[str] = Field(default_factory=list)
	details: list[str] = Field(default_factory=list)
