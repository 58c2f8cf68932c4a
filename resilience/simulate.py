"""
Simulation Orchestrator
=======================
Runs the full design simulation for one building:

1. Score the design (foundation, elevation, material, mitigation)
2. Project the cutoff year under the default sea level rise scenario
3. Look up the material risk score
4. Build the narrative prompt
5. Ask the narrative generator for a recommendation and cost-benefit text
6. Assemble the SimulationResult

Reference data integrity failures and unknown scenarios abort the
simulation. Narrative failures never do: fallback text is substituted.

Author: Floodwise Team
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from .errors import ExternalServiceDegraded
from .narrative import (
    NarrativeClient, GeminiNarrativeClient, parse_narrative,
    FALLBACK_RECOMMENDATION, FALLBACK_COST_BENEFIT,
    MISSING_RECOMMENDATION, MISSING_COST_BENEFIT
)
from .prompt import build_prompt
from .reference_data import ReferenceData, get_reference_data
from .schemas import BuildingInput, SimulationResult, NarrativeSections
from .scoring import evaluate, material_risk_score
from .timeline import project_cutoff_year, DEFAULT_SCENARIO

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_OUTPUT_TOKENS = 600


class ResilienceSimulator:
    """
    Sequences scoring, timeline projection, prompt assembly and the
    narrative call. Holds no per-request state, so one instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        reference: ReferenceData,
        client: NarrativeClient,
        scenario: str = DEFAULT_SCENARIO,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    ):
        self.reference = reference
        self.client = client
        self.scenario = scenario
        self.timeout = timeout
        self.max_output_tokens = max_output_tokens

    @classmethod
    def from_config(
        cls,
        settings: Mapping[str, Any],
        reference: Optional[ReferenceData] = None,
        client: Optional[NarrativeClient] = None
    ) -> "ResilienceSimulator":
        """Build a simulator from Flask-style config settings"""
        if reference is None:
            reference = get_reference_data(settings.get("REFERENCE_DATA_PATH"))
        if client is None:
            client = GeminiNarrativeClient(
                api_key=settings.get("GOOGLE_API_KEY"),
                model_name=settings.get("NARRATIVE_MODEL", "gemini-1.5-flash"),
                temperature=settings.get("NARRATIVE_TEMPERATURE", 1.0)
            )
        return cls(
            reference=reference,
            client=client,
            scenario=settings.get("DEFAULT_SCENARIO", DEFAULT_SCENARIO),
            timeout=settings.get("NARRATIVE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            max_output_tokens=settings.get("NARRATIVE_MAX_OUTPUT_TOKENS", DEFAULT_MAX_OUTPUT_TOKENS)
        )

    def simulate(self, building: BuildingInput) -> SimulationResult:
        """
        Run one simulation.

        Raises:
            MissingReferenceData: foundation or neighborhood not catalogued
            UnknownScenario: configured scenario not modeled
        """
        scoring = evaluate(building, self.reference)

        bfe = self.reference.neighborhood(building.neighborhood)
        cutoff_year = project_cutoff_year(
            building.elevation_ft, bfe.bfe_ft, self.scenario, self.reference
        )

        risk_score = material_risk_score(building.material, self.reference)

        prompt = build_prompt(building, scoring, cutoff_year, self.reference)
        logger.debug(f"Narrative prompt:\n{prompt}")

        recommendation, cost_benefit, degraded = self._narrate(prompt)

        result = SimulationResult(
            resilience_score=scoring.resilience_score,
            cutoff_year=cutoff_year,
            material_risk_score=risk_score,
            recommendation=recommendation,
            cost_benefit_analysis=cost_benefit,
            breakdown=scoring.breakdown,
            scenario=self.scenario,
            narrative_degraded=degraded
        )
        logger.info(
            f"Simulated {building.neighborhood} design: score={result.resilience_score} "
            f"cutoff={result.cutoff_year} scenario={self.scenario} degraded={degraded}"
        )
        return result

    def _narrate(self, prompt: str) -> Tuple[str, str, bool]:
        """Single narrative call with fallback substitution; never raises"""
        try:
            text = self.client.generate(prompt, self.timeout, self.max_output_tokens)
        except ExternalServiceDegraded as e:
            logger.warning(f"Narrative generation degraded: {e}")
            return FALLBACK_RECOMMENDATION, FALLBACK_COST_BENEFIT, True
        except Exception as e:
            logger.error(f"Narrative client raised unexpectedly: {e}")
            return FALLBACK_RECOMMENDATION, FALLBACK_COST_BENEFIT, True

        parsed = parse_narrative(text)
        if isinstance(parsed, NarrativeSections):
            return parsed.recommendation, parsed.cost_benefit_analysis, False

        logger.warning(f"Malformed narrative output: {parsed.reason}")
        return (
            parsed.recommendation or MISSING_RECOMMENDATION,
            parsed.cost_benefit_analysis or MISSING_COST_BENEFIT,
            True
        )


def simulate(
    building: BuildingInput,
    reference: Optional[ReferenceData] = None,
    client: Optional[NarrativeClient] = None,
    settings: Optional[Mapping[str, Any]] = None
) -> SimulationResult:
    """Run one simulation with process-wide reference data and configured settings"""
    if settings is None:
        from config import load_settings
        settings = load_settings()
    simulator = ResilienceSimulator.from_config(settings, reference=reference, client=client)
    return simulator.simulate(building)
