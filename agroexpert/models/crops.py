"""Crop thermal profiles — agronomic reference table.

Each profile carries the temperatures the engine reasons about:

    base_temp    growth accrues only above this (°C)
    lethal_min   at or below this the crop suffers critical damage (°C)
    stress_temp  upper heat-stress threshold (°C)

The table is read-only; per-farm overrides are merged on top per call.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

GENERIC_CROP = "Generic"


@dataclass(frozen=True)
class CropThermalProfile:
    """Per-crop temperature constants. ``None`` means "use the scorer default"."""

    base_temp: float
    lethal_min: float | None = None
    stress_temp: float | None = None

    def __repr__(self) -> str:
        return (
            f"<CropThermalProfile base={self.base_temp!r} "
            f"lethal_min={self.lethal_min!r} stress={self.stress_temp!r}>"
        )


CROP_PROFILES: MappingProxyType[str, CropThermalProfile] = MappingProxyType(
    {
        "Wheat": CropThermalProfile(base_temp=0.0, lethal_min=-4.0),
        "Corn": CropThermalProfile(base_temp=10.0, lethal_min=-1.0),
        "Cotton": CropThermalProfile(base_temp=15.0, lethal_min=5.0),
        "Citrus": CropThermalProfile(base_temp=13.0, lethal_min=-2.0),
        GENERIC_CROP: CropThermalProfile(base_temp=5.0, lethal_min=0.0),
    }
)
