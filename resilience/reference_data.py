"""
Resilience Simulator - Reference Data
======================================
Immutable lookup tables used by scoring, timeline projection and prompt
generation: foundation scores, material and mitigation profiles, base flood
elevation (BFE) by neighborhood and sea level rise scenarios.

The built-in dataset covers New Orleans neighborhoods (FEMA flood map BFEs
with a +/-0.5 ft mapping uncertainty) and NOAA sea level rise projections for
Grand Isle, LA. A JSON file with the same layout can replace it at startup.

Author: Floodwise Team
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Any

from .errors import MissingReferenceData

logger = logging.getLogger(__name__)

WORST_CASE_SCENARIO = "1.0 - HIGH"


@dataclass(frozen=True)
class MaterialProfile:
    score: int
    durability: str
    description: str


@dataclass(frozen=True)
class MitigationProfile:
    score: int
    effectiveness: str
    description: str


@dataclass(frozen=True)
class NeighborhoodProfile:
    bfe_ft: float
    uncertainty_ft: float


@dataclass(frozen=True)
class ReferenceData:
    """
    Read-only snapshot of every catalog the engine consults.
    Safe to share between concurrent requests.
    """
    foundations: Mapping[str, int]
    materials: Mapping[str, MaterialProfile]
    mitigation: Mapping[str, MitigationProfile]
    neighborhoods: Mapping[str, NeighborhoodProfile]
    scenarios: Mapping[str, Mapping[int, float]]

    @classmethod
    def build(
        cls,
        foundations: Dict[str, int],
        materials: Dict[str, MaterialProfile],
        mitigation: Dict[str, MitigationProfile],
        neighborhoods: Dict[str, NeighborhoodProfile],
        scenarios: Dict[str, Dict[int, float]],
    ) -> "ReferenceData":
        """Copy the given tables into read-only mappings"""
        return cls(
            foundations=MappingProxyType(dict(foundations)),
            materials=MappingProxyType(dict(materials)),
            mitigation=MappingProxyType(dict(mitigation)),
            neighborhoods=MappingProxyType(dict(neighborhoods)),
            scenarios=MappingProxyType({
                name: MappingProxyType({int(year): float(rise) for year, rise in series.items()})
                for name, series in scenarios.items()
            }),
        )

    def neighborhood(self, name: str) -> NeighborhoodProfile:
        profile = self.neighborhoods.get(name)
        if profile is None:
            raise MissingReferenceData("neighborhood", name)
        return profile

    def max_bfe_ft(self) -> float:
        if not self.neighborhoods:
            return 0.0
        return max(n.bfe_ft for n in self.neighborhoods.values())

    def options(self) -> Dict[str, Any]:
        """Option catalog for form rendering"""
        return {
            "foundations": {name: score for name, score in self.foundations.items()},
            "materials": {
                name: {"score": m.score, "durability": m.durability, "description": m.description}
                for name, m in self.materials.items()
            },
            "mitigationFeatures": {
                name: {"score": f.score, "effectiveness": f.effectiveness, "description": f.description}
                for name, f in self.mitigation.items()
            },
            "neighborhoods": {
                name: {"bfeFt": n.bfe_ft, "uncertaintyFt": n.uncertainty_ft}
                for name, n in self.neighborhoods.items()
            },
            "scenarios": {
                name: {str(year): series[year] for year in sorted(series)}
                for name, series in self.scenarios.items()
            },
        }


def default_reference_data() -> ReferenceData:
    """Built-in dataset shipped with the simulator"""
    return ReferenceData.build(
        foundations={
            "slab": 10,
            "pier": 20,
            "elevated": 30,
        },
        materials={
            "wood": MaterialProfile(10, "low", "Wood is prone to water damage, rot, and mold."),
            "metal": MaterialProfile(15, "medium", "Metal resists flooding but may corrode."),
            "concrete": MaterialProfile(25, "high", "Concrete is highly resistant to flooding."),
            "composite": MaterialProfile(28, "high", "Composite materials offer strong flood resilience."),
        },
        mitigation={
            "floodVents": MitigationProfile(
                12, "high", "Allows water to pass through foundation to relieve pressure."
            ),
            "breakawayWalls": MitigationProfile(
                10, "medium", "Walls that collapse under pressure to protect main structure."
            ),
            "sumpPump": MitigationProfile(8, "medium", "Removes water from basements or crawl spaces."),
        },
        neighborhoods={
            "Bywater": NeighborhoodProfile(6.0, 0.5),
            "MidCity": NeighborhoodProfile(5.5, 0.5),
            "Lakeview": NeighborhoodProfile(7.0, 0.5),
            "FrenchQuarter": NeighborhoodProfile(4.0, 0.5),
            "Lower9thWard": NeighborhoodProfile(8.0, 0.5),
        },
        scenarios={
            "1.0 - LOW": {2020: 0.52, 2030: 0.89, 2040: 1.31, 2050: 1.74, 2060: 2.23},
            "1.0 - MED": {2020: 0.59, 2030: 1.02, 2040: 1.48, 2050: 1.97, 2060: 2.53},
            "1.0 - HIGH": {2020: 0.69, 2030: 1.15, 2040: 1.71, 2050: 2.26, 2060: 2.85},
        },
    )


def load_reference_data(path: str) -> ReferenceData:
    """
    Load reference tables from a JSON file.

    Expected keys: foundations, materials, mitigation, neighborhoods, scenarios.
    Scenario years may be given as strings.

    Raises:
        MissingReferenceData: if a table is absent or an entry is malformed
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    for table in ("foundations", "materials", "mitigation", "neighborhoods", "scenarios"):
        if table not in raw:
            raise MissingReferenceData("file", table)

    try:
        data = ReferenceData.build(
            foundations={k: int(v) for k, v in raw["foundations"].items()},
            materials={
                k: MaterialProfile(int(v["score"]), v["durability"], v["description"])
                for k, v in raw["materials"].items()
            },
            mitigation={
                k: MitigationProfile(int(v["score"]), v["effectiveness"], v["description"])
                for k, v in raw["mitigation"].items()
            },
            neighborhoods={
                k: NeighborhoodProfile(float(v["bfeFt"]), float(v.get("uncertaintyFt", 0.0)))
                for k, v in raw["neighborhoods"].items()
            },
            scenarios=raw["scenarios"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MissingReferenceData("file", f"{Path(path).name}: {e}")

    logger.info(
        f"Loaded reference data from {path}: {len(data.neighborhoods)} neighborhoods, "
        f"{len(data.scenarios)} scenarios"
    )
    return data


# keyed by path; None is the built-in dataset
_reference_cache: Dict[Optional[str], ReferenceData] = {}


def get_reference_data(path: Optional[str] = None) -> ReferenceData:
    """Get the process-wide reference data for a path, loading it on first use"""
    key = str(path) if path else None
    if key not in _reference_cache:
        _reference_cache[key] = load_reference_data(key) if key else default_reference_data()
    return _reference_cache[key]
