"""Pydantic schemas exchanged with the advisor's data collaborators."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agroexpert.schemas.analysis import AnalysisResult, CropConfigOverrides


class FarmSnapshot(BaseModel):
	"""Averaged latest telemetry for one farm, as resolved by the aggregator."""

	model_config = ConfigDict(allow_inf_nan=False)

	farm_id: str
	crop: str | None = None
	temp: float | None = None
	hum: float | None = None
	wind: float | None = None
	rain: float | None = None
	soil_temp: float | None = None
	soil_moisture: float | None = Field(default=None, ge=0.0, le=100.0)
	config_overrides: CropConfigOverrides = Field(default_factory=CropConfigOverrides)


class AdvisoryResponse(BaseModel):
	farm_id: str
	available: bool
	generated_at: datetime
	crop: str | None = None
	summary: str
	result: AnalysisResult | None = None
