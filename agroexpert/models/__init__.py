"""Static reference data — enums and the crop thermal profile table.

Application code can do::

    from agroexpert.models import CROP_PROFILES, RiskLevelEnum, ...
"""

# ── Crop reference ──────────────────────────────────────────────────────────
from agroexpert.models.crops import (
    CROP_PROFILES,
    GENERIC_CROP,
    CropThermalProfile,
)

# ── Enums ───────────────────────────────────────────────────────────────────
from agroexpert.models.enums import (
    AlertSeverityEnum,
    FrostSeverityEnum,
    GrowthStateEnum,
    RiskCodeEnum,
    RiskLevelEnum,
)

__all__ = [
    "CROP_PROFILES",
    "GENERIC_CROP",
    "AlertSeverityEnum",
    "CropThermalProfile",
    "FrostSeverityEnum",
    "GrowthStateEnum",
    "RiskCodeEnum",
    "RiskLevelEnum",
]
