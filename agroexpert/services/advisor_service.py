"""Advisory service — gathers farm telemetry and forecasts, then runs the engine."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

from agroexpert.config import Settings, get_settings
from agroexpert.logging_config import bind_farm_context, configure_structured_logging, get_logger
from agroexpert.schemas.advisory import AdvisoryResponse, FarmSnapshot
from agroexpert.schemas.analysis import (
	ExpertInput,
	ForecastReading,
	SoilReading,
	WeatherReading,
)
from agroexpert.services.expert_engine import ExpertEngine

_logger = get_logger("advisor")


class FarmDataAggregator(Protocol):
	async def get_farm_snapshot(self, farm_id: str) -> FarmSnapshot:
		"""Averaged latest telemetry; raises ``LookupError`` for unknown farms."""
		...


class ForecastProvider(Protocol):
	async def get_forecast(self, farm_id: str) -> ForecastReading:
		...


class AdvisorService:
	def __init__(
		self,
		aggregator: FarmDataAggregator,
		forecast_provider: ForecastProvider | None = None,
		settings: Settings | None = None,
	):
		self.aggregator = aggregator
		self.forecast_provider = forecast_provider
		self.settings = settings or get_settings()
		configure_structured_logging(self.settings)
		self.engine = ExpertEngine(self.settings)

	async def generate_advice(self, farm_id: str) -> AdvisoryResponse:
		bind_farm_context(farm_id)
		try:
			snapshot = await self.aggregator.get_farm_snapshot(farm_id)
		except Exception as exc:
			_logger.warning("farm_snapshot_failed", error=str(exc), error_type=type(exc).__name__)
			return AdvisoryResponse(
				farm_id=farm_id,
				available=False,
				generated_at=datetime.now(UTC),
				summary=self.settings.unavailable_message,
			)

		forecast = await self._fetch_forecast(farm_id)
		result = self.engine.analyze(self.build_input(snapshot, forecast), snapshot.config_overrides)

		return AdvisoryResponse(
			farm_id=farm_id,
			available=True,
			generated_at=datetime.now(UTC),
			crop=snapshot.crop or self.settings.default_crop,
			summary=result.summary,
			result=result,
		)

	def build_input(self, snapshot: FarmSnapshot, forecast: ForecastReading) -> ExpertInput:
		air_temp = snapshot.temp
		if air_temp is None:
			_logger.info("air_temp_missing", fallback=self.settings.fallback_air_temp)
			air_temp = self.settings.fallback_air_temp

		return ExpertInput(
			crop=snapshot.crop,
			weather=WeatherReading(
				temp=air_temp,
				hum=snapshot.hum,
				wind=snapshot.wind,
				rain=snapshot.rain,
			),
			forecast=forecast,
			soil=SoilReading(temp=snapshot.soil_temp, moisture=snapshot.soil_moisture),
		)

	async def _fetch_forecast(self, farm_id: str) -> ForecastReading:
		if self.forecast_provider is None:
			return ForecastReading()
		try:
			return await self.forecast_provider.get_forecast(farm_id)
		except Exception as exc:
			# Degrade to a forecast-less context rather than refusing advice.
			_logger.warning("forecast_fetch_failed", error=str(exc), error_type=type(exc).__name__)
			return ForecastReading()
