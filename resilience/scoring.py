"""
Resilience Scoring
==================
Converts a building design into a component score breakdown and a composite
resilience score (0-100).

Components:
- Foundation: direct catalog score (missing entry is a data integrity error)
- Elevation: tiered on net elevation above the neighborhood BFE
- Material: catalog score, 0 when the material is not catalogued
- Mitigation: sum of catalogued feature scores

The composite is the capped sum of the components; the breakdown keeps the
uncapped values.

Author: Floodwise Team
"""

import logging

from .errors import MissingReferenceData
from .reference_data import ReferenceData
from .schemas import BuildingInput, ScoreBreakdown, ScoringResult, MaterialType, catalog_key

logger = logging.getLogger(__name__)

MAX_RESILIENCE_SCORE = 100

# (minimum net elevation in ft, points), highest tier first
ELEVATION_TIERS = (
    (10.0, 30),
    (6.0, 20),
    (3.0, 10),
)


def elevation_score(net_elevation_ft: float) -> int:
    """
    Score the height of a structure above its neighborhood BFE.

    Tier thresholds are inclusive: exactly 10 ft earns 30 points,
    exactly 6 ft earns 20 and exactly 3 ft earns 10. Anything below 3 ft is 0.
    """
    for threshold, points in ELEVATION_TIERS:
        if net_elevation_ft >= threshold:
            return points
    return 0


def foundation_score(foundation_type, reference: ReferenceData) -> int:
    key = catalog_key(foundation_type)
    if key not in reference.foundations:
        raise MissingReferenceData("foundation", key)
    return reference.foundations[key]


def material_score(material, reference: ReferenceData) -> int:
    profile = reference.materials.get(catalog_key(material))
    return profile.score if profile else 0


def mitigation_score(features, reference: ReferenceData) -> int:
    total = 0
    # set() so a repeated key cannot count twice
    for key in {catalog_key(f) for f in features}:
        profile = reference.mitigation.get(key)
        if profile is not None:
            total += profile.score
    return total


def material_risk_score(material: MaterialType, reference: ReferenceData) -> int:
    """Raw material score, reported outside the composite as a durability proxy"""
    return material_score(material, reference)


def evaluate(building: BuildingInput, reference: ReferenceData) -> ScoringResult:
    """
    Score a building design.

    Args:
        building: Validated design input
        reference: Reference tables

    Returns:
        ScoringResult with breakdown, capped composite and raw sum

    Raises:
        MissingReferenceData: foundation type or neighborhood not catalogued
    """
    neighborhood = reference.neighborhood(building.neighborhood)
    net_elevation = building.elevation_ft - neighborhood.bfe_ft

    breakdown = ScoreBreakdown(
        foundation=foundation_score(building.foundation_type, reference),
        elevation=elevation_score(net_elevation),
        material=material_score(building.material, reference),
        mitigation=mitigation_score(building.mitigation_features, reference),
    )
    raw = breakdown.total

    if raw > MAX_RESILIENCE_SCORE:
        logger.debug(f"Raw score {raw} capped at {MAX_RESILIENCE_SCORE}")

    return ScoringResult(
        breakdown=breakdown,
        resilience_score=min(raw, MAX_RESILIENCE_SCORE),
        raw_score=raw,
        net_elevation_ft=net_elevation,
    )
