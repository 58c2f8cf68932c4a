"""
Resilience Simulator - Data Schemas
Typed inputs and outputs for the building resilience evaluation
"""

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Dict, Any, Union
from enum import Enum

from .errors import InvalidInput


class FoundationType(str, Enum):
    """Supported foundation systems"""
    SLAB = "slab"
    PIER = "pier"
    ELEVATED = "elevated"


class MaterialType(str, Enum):
    """Primary structural materials"""
    WOOD = "wood"
    METAL = "metal"
    CONCRETE = "concrete"
    COMPOSITE = "composite"


class MitigationFeature(str, Enum):
    """Flood mitigation add-ons"""
    FLOOD_VENTS = "floodVents"
    BREAKAWAY_WALLS = "breakawayWalls"
    SUMP_PUMP = "sumpPump"


class Tier(str, Enum):
    """Qualitative durability / effectiveness rating"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def catalog_key(value: Union[Enum, str]) -> str:
    """Reference tables are keyed by plain strings, not enum members"""
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _parse_enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInput(f"{field_name} must be one of: {allowed} (got {value!r})")


@dataclass(frozen=True)
class BuildingInput:
    """A single building design submitted for evaluation"""
    foundation_type: FoundationType
    elevation_ft: float
    material: MaterialType
    neighborhood: str
    mitigation_features: FrozenSet[MitigationFeature] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "BuildingInput":
        """
        Build an input from the camelCase JSON payload sent by the form.

        Raises:
            InvalidInput: on missing fields, wrong types or unknown options
        """
        if not isinstance(payload, dict):
            raise InvalidInput("Request body must be a JSON object")

        required = ("foundationType", "elevationFt", "material", "mitigationFeatures", "neighborhood")
        missing = [name for name in required if name not in payload]
        if missing:
            raise InvalidInput(f"Missing required fields: {', '.join(missing)}")

        elevation = payload["elevationFt"]
        # bool is an int subclass
        if isinstance(elevation, bool) or not isinstance(elevation, (int, float)):
            raise InvalidInput("elevationFt must be a number")
        if not math.isfinite(elevation):
            raise InvalidInput("elevationFt must be a finite number")
        if elevation < 0:
            raise InvalidInput("elevationFt must not be negative")

        neighborhood = payload["neighborhood"]
        if not isinstance(neighborhood, str) or not neighborhood.strip():
            raise InvalidInput("neighborhood must be a non-empty string")

        features = payload["mitigationFeatures"]
        if not isinstance(features, list):
            raise InvalidInput("mitigationFeatures must be a list")

        return cls(
            foundation_type=_parse_enum(FoundationType, payload["foundationType"], "foundationType"),
            elevation_ft=float(elevation),
            material=_parse_enum(MaterialType, payload["material"], "material"),
            neighborhood=neighborhood.strip(),
            mitigation_features=frozenset(
                _parse_enum(MitigationFeature, f, "mitigationFeatures") for f in features
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "foundationType": catalog_key(self.foundation_type),
            "elevationFt": self.elevation_ft,
            "material": catalog_key(self.material),
            "mitigationFeatures": sorted(catalog_key(f) for f in self.mitigation_features),
            "neighborhood": self.neighborhood,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-component contributions before the composite cap"""
    foundation: int
    elevation: int
    material: int
    mitigation: int

    @property
    def total(self) -> int:
        return self.foundation + self.elevation + self.material + self.mitigation

    def to_dict(self) -> Dict[str, int]:
        return {
            "foundation": self.foundation,
            "elevation": self.elevation,
            "material": self.material,
            "mitigation": self.mitigation,
        }


@dataclass(frozen=True)
class ScoringResult:
    """Output of the scoring engine"""
    breakdown: ScoreBreakdown
    resilience_score: int  # capped at 100
    raw_score: int  # uncapped sum
    net_elevation_ft: float


@dataclass(frozen=True)
class NarrativeSections:
    """Both sections were found in the generator output"""
    recommendation: str
    cost_benefit_analysis: str


@dataclass(frozen=True)
class NarrativeParseFailure:
    """Generator output lacked at least one section; keeps whatever was found"""
    reason: str
    recommendation: Optional[str] = None
    cost_benefit_analysis: Optional[str] = None


NarrativeParseResult = Union[NarrativeSections, NarrativeParseFailure]


@dataclass(frozen=True)
class SimulationResult:
    """Complete response for one simulation request"""
    resilience_score: int
    cutoff_year: int
    material_risk_score: int
    recommendation: str
    cost_benefit_analysis: str
    breakdown: ScoreBreakdown
    scenario: str
    narrative_degraded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response"""
        return {
            "resilienceScore": self.resilience_score,
            "cutoffYear": self.cutoff_year,
            "materialRiskScore": self.material_risk_score,
            "recommendation": self.recommendation,
            "costBenefitAnalysis": self.cost_benefit_analysis,
            "breakdown": self.breakdown.to_dict(),
            "scenario": self.scenario,
            "narrativeDegraded": self.narrative_degraded,
        }
