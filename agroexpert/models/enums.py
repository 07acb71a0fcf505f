"""Symbolic enum types shared by the engine, its schemas and its tests.

Values are the wire strings emitted in ``AnalysisResult`` payloads.
"""

from enum import StrEnum

# ── Phenology ───────────────────────────────────────────────────────────────


class GrowthStateEnum(StrEnum):
    """Daily growth pace derived from growing-degree-days."""

    stalled = "stalled"
    slow = "slow"
    normal = "normal"
    fast = "fast"


# ── Risk scoring ────────────────────────────────────────────────────────────


class RiskLevelEnum(StrEnum):
    """Ordinal risk category, ordered low < medium < high < critical."""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class RiskCodeEnum(StrEnum):
    """Stable identifiers of the risk rules (never shown to end users)."""

    force_majeure = "FORCE_MAJEURE"
    frost = "FROST"
    heat = "HEAT"
    drought = "DROUGHT"
    root_rot = "ROOT_ROT"
    root_freeze = "ROOT_FREEZE"
    wind = "WIND"


# ── Advisory output ─────────────────────────────────────────────────────────


class AlertSeverityEnum(StrEnum):
    """Severity attached to a single alert."""

    warning = "warning"
    critical = "critical"


class FrostSeverityEnum(StrEnum):
    """Frost intensity bands used by the weather-risk helper."""

    light = "light"
    moderate = "moderate"
    severe = "severe"
