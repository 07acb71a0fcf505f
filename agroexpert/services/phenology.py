"""Phenology model — growing-degree-days and growth pace per crop."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace

from agroexpert.models.crops import CROP_PROFILES, GENERIC_CROP, CropThermalProfile
from agroexpert.models.enums import GrowthStateEnum
from agroexpert.schemas.analysis import CropConfigOverrides

# 45 °F, the classic chill-unit ceiling.
CHILLING_THRESHOLD_C = 7.2

SLOW_GROWTH_GDD = 5.0
FAST_GROWTH_GDD = 15.0


def _require_finite(**values: float) -> None:
	for name, value in values.items():
		if not math.isfinite(value):
			raise ValueError(f"{name} must be a finite number, got {value!r}")


def get_crop_config(crop_type: str | None) -> CropThermalProfile:
	"""Return the built-in profile for ``crop_type``, falling back to Generic."""
	if crop_type is None:
		return CROP_PROFILES[GENERIC_CROP]
	return CROP_PROFILES.get(crop_type, CROP_PROFILES[GENERIC_CROP])


def resolve_crop_config(
	crop_type: str | None,
	overrides: CropConfigOverrides | None = None,
) -> CropThermalProfile:
	"""Merge per-farm overrides field-by-field on top of the built-in profile.

	Fields the override leaves unset (or ``None``) keep their default value.
	"""
	profile = get_crop_config(crop_type)
	if overrides is None:
		return profile
	changes = overrides.model_dump(exclude_none=True)
	return replace(profile, **changes) if changes else profile


def calculate_gdd(
	t_max: float,
	t_min: float,
	crop_type: str | None,
	*,
	base_temp: float | None = None,
) -> float:
	"""Growing-degree-days for one period: ``max((t_max + t_min) / 2 - base, 0)``.

	When only an instantaneous reading is available, callers pass it as both
	``t_max`` and ``t_min``; the result is then a proxy, not a true daily value.
	``base_temp`` replaces the crop's built-in base when a merged profile is in use.
	"""
	_require_finite(t_max=t_max, t_min=t_min)
	if base_temp is None:
		base_temp = get_crop_config(crop_type).base_temp
	gdd = (t_max + t_min) / 2 - base_temp
	return gdd if gdd > 0 else 0.0


def get_growth_status(gdd_today: float) -> GrowthStateEnum:
	if gdd_today <= 0:
		return GrowthStateEnum.stalled
	if gdd_today < SLOW_GROWTH_GDD:
		return GrowthStateEnum.slow
	if gdd_today < FAST_GROWTH_GDD:
		return GrowthStateEnum.normal
	return GrowthStateEnum.fast


def calculate_chilling_hours(hourly_temps: Iterable[float] | None) -> int:
	"""Count hourly samples strictly below 7.2 °C."""
	if not hourly_temps:
		return 0
	return sum(1 for temp in hourly_temps if temp < CHILLING_THRESHOLD_C)
