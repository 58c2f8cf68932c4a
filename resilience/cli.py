"""
Command-line entry point for running one resilience simulation.

Usage:
    python -m resilience.cli --foundation elevated --elevation 16 \
        --material concrete --neighborhood Bywater --feature floodVents
"""

import argparse
import json
import logging
import sys

from config import load_settings
from .errors import InvalidInput, MissingReferenceData, UnknownScenario
from .narrative import OfflineNarrativeClient
from .schemas import BuildingInput, FoundationType, MaterialType, MitigationFeature
from .simulate import ResilienceSimulator
from .timeline import flood_lines

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate flood resilience of a building design")
    parser.add_argument("--foundation", required=True, choices=[f.value for f in FoundationType],
                        help="Foundation type")
    parser.add_argument("--elevation", required=True, type=float, help="Elevation in feet")
    parser.add_argument("--material", required=True, choices=[m.value for m in MaterialType],
                        help="Primary material")
    parser.add_argument("--feature", action="append", default=[], dest="features",
                        choices=[f.value for f in MitigationFeature],
                        help="Mitigation feature (repeatable)")
    parser.add_argument("--neighborhood", required=True, help="Neighborhood name")
    parser.add_argument("--scenario", default=None, help="Sea level rise scenario (default from config)")
    parser.add_argument("--reference-data", default=None, help="Reference data JSON file")
    parser.add_argument("--no-narrative", action="store_true", help="Skip the Gemini call")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--config", default="default", help="Config profile name")
    return parser


def _print_report(result, building, lines):
    print(f"\n🏠 {building.neighborhood}: {building.foundation_type.value} foundation, "
          f"{building.material.value}, {building.elevation_ft} ft")
    print(f"📊 Resilience Score: {result.resilience_score}/100")
    b = result.breakdown
    print(f"   Foundation {b.foundation} | Elevation {b.elevation} | "
          f"Material {b.material} | Mitigation {b.mitigation}")
    print(f"🧱 Material Risk Score: {result.material_risk_score}")
    print(f"🌊 Projected Safe Until: {result.cutoff_year} ({result.scenario})")
    for year, line_ft in lines:
        marker = "⚠️" if building.elevation_ft < line_ft else "✅"
        print(f"   {marker} {year}: flood line {line_ft:.2f} ft")
    print(f"\nDesign Recommendation:\n{result.recommendation}")
    print(f"\nCost-Benefit Analysis:\n{result.cost_benefit_analysis}\n")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Setup logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    settings = load_settings(args.config)
    if args.reference_data:
        settings["REFERENCE_DATA_PATH"] = args.reference_data
    if args.scenario:
        settings["DEFAULT_SCENARIO"] = args.scenario

    try:
        building = BuildingInput.from_dict({
            "foundationType": args.foundation,
            "elevationFt": args.elevation,
            "material": args.material,
            "mitigationFeatures": args.features,
            "neighborhood": args.neighborhood,
        })
        client = OfflineNarrativeClient() if args.no_narrative else None
        simulator = ResilienceSimulator.from_config(settings, client=client)
        result = simulator.simulate(building)
        bfe = simulator.reference.neighborhood(building.neighborhood)
        lines = flood_lines(bfe.bfe_ft, simulator.scenario, simulator.reference)
    except (InvalidInput, MissingReferenceData, UnknownScenario) as e:
        logger.error(f"Simulation failed: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_report(result, building, lines)
    return 0


if __name__ == "__main__":
    sys.exit(main())
