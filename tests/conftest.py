"""Shared pytest fixtures — settings, engine, collaborator stubs."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from agroexpert.config import LogFormat, Settings
from agroexpert.schemas.advisory import FarmSnapshot
from agroexpert.schemas.analysis import ForecastReading
from agroexpert.services.expert_engine import ExpertEngine


class FakeAggregator:
	def __init__(self, snapshot: FarmSnapshot | None = None, error: Exception | None = None) -> None:
		self.get_farm_snapshot = AsyncMock(return_value=snapshot, side_effect=error)


class FakeForecastProvider:
	def __init__(self, forecast: ForecastReading | None = None, error: Exception | None = None) -> None:
		self.get_forecast = AsyncMock(return_value=forecast or ForecastReading(), side_effect=error)


@pytest.fixture
def settings() -> Settings:
	"""Settings isolated from any local .env file."""
	return Settings(_env_file=None, log_format=LogFormat.console)


@pytest.fixture
def engine(settings: Settings) -> ExpertEngine:
	return ExpertEngine(settings)


@pytest.fixture
def make_snapshot() -> Any:
	def _make(**fields: Any) -> FarmSnapshot:
		fields.setdefault("farm_id", "farm-1")
		return FarmSnapshot(**fields)

	return _make


@pytest.fixture
def fake_aggregator() -> type[FakeAggregator]:
	return FakeAggregator


@pytest.fixture
def fake_forecast() -> type[FakeForecastProvider]:
	return FakeForecastProvider
