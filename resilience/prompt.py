"""
Narrative Prompt Builder
========================
Assembles the text sent to the narrative generator. The prompt carries the
design input, the simulation output, the available design options, a
worst-case flood figure and a cost/durability table, and ends with a fixed
two-part response format so the reply can be split into a design
recommendation and a cost-benefit analysis.

Author: Floodwise Team
"""

from .reference_data import ReferenceData, WORST_CASE_SCENARIO
from .schemas import BuildingInput, ScoringResult, catalog_key

RECOMMENDATION_HEADING = "1. Design Recommendation:"
COST_BENEFIT_HEADING = "2. Cost-Benefit Analysis:"

COST_DURABILITY_CONTEXT = """[COST & DURABILITY CONTEXT]
• Foundation Types:
  - Slab: ~$6,000, low flood resistance, ~20 yrs durability
  - Pier: ~$9,000, moderate flood resistance, ~25 yrs durability
  - Elevated: ~$14,000, high flood resistance, ~30+ yrs durability

• Materials:
  - Wood: low durability (~10 yrs), high flood damage risk (~$15K repair avg)
  - Metal: medium durability (~20 yrs), corrosion risk (~$9K repair avg)
  - Concrete: high durability (~30 yrs), low damage risk (~$5K repair avg)
  - Composite: high durability (~30 yrs), low damage risk (~$6K repair avg)

• Mitigation Features:
  - Flood vents: ~$1,200 (high effectiveness)
  - Breakaway walls: ~$3,500 (medium)
  - Sump pump: ~$900 (medium)

• Elevation Improvements:
  - +0 ft → ~$0
  - +2 ft → ~$8,000
  - +4 ft → ~$14,000
  - +6 ft → ~$20,000
  - +8 ft → ~$25,000
  - +10 ft → ~$30,000"""


def worst_case_flood_line(reference: ReferenceData) -> float:
    """Max rise of the worst-case scenario plus the highest neighborhood BFE"""
    worst = reference.scenarios.get(WORST_CASE_SCENARIO) or {}
    max_rise = max(worst.values()) if worst else 0.0
    return max_rise + reference.max_bfe_ft()


def _bullets(lines):
    return "\n".join(lines) if lines else "- none"


def build_prompt(
    building: BuildingInput,
    scoring: ScoringResult,
    cutoff_year: int,
    reference: ReferenceData
) -> str:
    """
    Render the narrative prompt for one simulation.

    Raises:
        MissingReferenceData: if the neighborhood is not catalogued
    """
    bfe = reference.neighborhood(building.neighborhood)
    material = catalog_key(building.material)
    material_profile = reference.materials.get(material)
    material_desc = material_profile.description if material_profile else ""
    breakdown = scoring.breakdown

    feature_lines = []
    for key in sorted(catalog_key(f) for f in building.mitigation_features):
        profile = reference.mitigation.get(key)
        feature_lines.append(f"- {key}: {profile.description if profile else 'N/A'}")

    foundation_options = [f"- {name} (score: {score})" for name, score in reference.foundations.items()]
    material_options = [f"- {name}: {info.description}" for name, info in reference.materials.items()]
    mitigation_options = [f"- {name}: {info.description}" for name, info in reference.mitigation.items()]

    return f"""You are an expert flood resilience design advisor.
Help design buildings that will perform well as conditions change over the next 30 years.
Analyze the building design and simulation below, and provide:

1. A short, actionable recommendation for improving resilience
2. A thoughtful cost-benefit analysis of the current design vs. possible improvements

--- DESIGN INPUT ---
• Neighborhood: {building.neighborhood}
• Base Flood Elevation (BFE): {bfe.bfe_ft} ft ±{bfe.uncertainty_ft} ft
• Foundation Type: {catalog_key(building.foundation_type)}
• Elevation: {building.elevation_ft} ft
• Material: {material} - {material_desc}
• Mitigation Features:
{_bullets(feature_lines)}

--- SIMULATION OUTPUT ---
• Resilience Score: {scoring.resilience_score}/100
• Projected Safe Until: {cutoff_year}
• Score Breakdown:
  - Foundation: {breakdown.foundation}
  - Elevation: {breakdown.elevation}
  - Material: {breakdown.material}
  - Mitigation: {breakdown.mitigation}

---
[DESIGN OPTIONS]
• Foundation Types:
{_bullets(foundation_options)}

• Materials:
{_bullets(material_options)}

• Flood Mitigation Features:
{_bullets(mitigation_options)}

[EXTREME FLOOD SCENARIO]
• Max projected flood level (BFE + sea level rise): {worst_case_flood_line(reference):.2f} ft (based on "{WORST_CASE_SCENARIO}")

---
{COST_DURABILITY_CONTEXT}

---

Please respond in this format:

{RECOMMENDATION_HEADING}
Consider available options, design input and output, and uncertainty (worst case flood scenario).
Be specific about how much elevation is needed to withstand future floods.
If the design already achieves a resilience score close to 100 and withstands flood projections through the last modeled year, avoid recommending major changes and keep additional cost low.
<one paragraph>

{COST_BENEFIT_HEADING}
Consider how to achieve a reasonable resilience score while minimizing the design cost.
<one paragraph>
"""
