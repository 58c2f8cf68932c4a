"""
Flood Timeline Projection
Finds the first modeled year a sea level rise scenario overtops a structure
"""

import logging
from typing import List, Tuple

from .errors import UnknownScenario
from .reference_data import ReferenceData

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO = "1.0 - HIGH"


def flood_lines(
    bfe_ft: float,
    scenario: str,
    reference: ReferenceData
) -> List[Tuple[int, float]]:
    """
    Projected flood line (BFE + sea level rise) per modeled year.

    Returns:
        List of (year, flood_line_ft) in ascending year order

    Raises:
        UnknownScenario: if the scenario is not modeled
    """
    series = reference.scenarios.get(scenario)
    if series is None:
        raise UnknownScenario(scenario)
    # storage order is not guaranteed chronological
    return [(year, bfe_ft + series[year]) for year in sorted(series)]


def project_cutoff_year(
    total_elevation_ft: float,
    bfe_ft: float,
    scenario: str,
    reference: ReferenceData
) -> int:
    """
    First year the projected flood line strictly exceeds the structure.

    A structure exactly at the flood line is still safe that year. If no
    modeled year overtops it, the last modeled year is returned.

    Raises:
        UnknownScenario: if the scenario is not modeled
    """
    lines = flood_lines(bfe_ft, scenario, reference)
    if not lines:
        raise UnknownScenario(scenario)

    for year, flood_line_ft in lines:
        if total_elevation_ft < flood_line_ft:
            logger.debug(
                f"Overtopped in {year}: {total_elevation_ft:.2f} ft < {flood_line_ft:.2f} ft ({scenario})"
            )
            return year

    return lines[-1][0]
