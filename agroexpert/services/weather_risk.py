"""Rule-of-thumb weather flags used to cross-check free-text forecasts.

Independent of the risk scorer: it reads a provider weather snapshot and
reports frost, wind and pesticide-spraying suitability.
"""

from __future__ import annotations

from agroexpert.models.enums import FrostSeverityEnum
from agroexpert.schemas.weather_risk import WeatherRiskReport, WeatherSnapshot

MODERATE_FROST_C = -2.2
SEVERE_FROST_C = -4.4
SPRAY_WIND_LIMIT_KMH = 20.0
SPRAY_TEMP_RANGE_C = (10.0, 25.0)
SPRAY_HUMIDITY_RANGE = (30.0, 85.0)


def frost_severity(temperature: float) -> FrostSeverityEnum:
	if temperature <= SEVERE_FROST_C:
		return FrostSeverityEnum.severe
	if temperature <= MODERATE_FROST_C:
		return FrostSeverityEnum.moderate
	return FrostSeverityEnum.light


def is_precipitating(snapshot: WeatherSnapshot) -> bool:
	if snapshot.is_raining:
		return True
	code = snapshot.condition_code
	return bool(code) and ("Y" in code or code == "K")


def calculate_weather_risk(snapshot: WeatherSnapshot | None) -> WeatherRiskReport:
	report = WeatherRiskReport()
	if snapshot is None:
		return report

	temp = snapshot.temperature
	wind = snapshot.wind_speed
	humidity = snapshot.humidity

	if temp is not None and temp < 0:
		report.frost_risk = True
		report.frost_severity = frost_severity(temp)
		report.details.append(f"Frost risk detected: {temp:.1f}°C ({report.frost_severity.value}).")

	if wind is not None and wind > SPRAY_WIND_LIMIT_KMH:
		report.wind_risk = True
		report.details.append(
			f"Wind risk: {wind:.1f} km/h > {SPRAY_WIND_LIMIT_KMH:.0f} km/h, spraying not advised."
		)

	blockers = report.spraying_blockers
	if is_precipitating(snapshot):
		blockers.append("precipitation")
	low, high = SPRAY_TEMP_RANGE_C
	if temp is not None and not low <= temp <= high:
		blockers.append(f"temperature {temp:.1f}°C outside {low:.0f}-{high:.0f}°C")
	if wind is not None and wind >= SPRAY_WIND_LIMIT_KMH:
		blockers.append(f"wind {wind:.1f} km/h too high")
	low, high = SPRAY_HUMIDITY_RANGE
	if humidity is not None and not low <= humidity <= high:
		blockers.append(f"humidity {humidity:.0f}% outside {low:.0f}-{high:.0f}%")

	report.spraying_suitable = not blockers
	if blockers:
		report.details.append(f"Spraying not suitable: {', '.join(blockers)}.")
	return report
