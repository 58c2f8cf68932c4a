"""
Unit tests for the simulation orchestrator.
"""

import dataclasses

import pytest

from resilience.errors import MissingReferenceData, UnknownScenario, ExternalServiceDegraded
from resilience.narrative import (
    FALLBACK_RECOMMENDATION, FALLBACK_COST_BENEFIT, MISSING_COST_BENEFIT, MISSING_RECOMMENDATION
)
from resilience.schemas import BuildingInput
from resilience.simulate import ResilienceSimulator, simulate

from conftest import RecordingClient, FailingClient


def test_successful_simulation(reference, elevated_concrete, recording_client):
    simulator = ResilienceSimulator(reference, recording_client)
    result = simulator.simulate(elevated_concrete)

    assert result.resilience_score == 85
    assert result.cutoff_year == 2060
    assert result.material_risk_score == 25
    assert result.scenario == "1.0 - HIGH"
    assert result.recommendation == "Raise the finished floor by 2 ft and add flood vents."
    assert result.cost_benefit_analysis.startswith("The extra $9,200")
    assert result.narrative_degraded is False


def test_single_bounded_narrative_call(reference, slab_wood, recording_client):
    simulator = ResilienceSimulator(reference, recording_client, timeout=4.5, max_output_tokens=321)
    simulator.simulate(slab_wood)

    assert len(recording_client.calls) == 1
    prompt, timeout, max_tokens = recording_client.calls[0]
    assert "Resilience Score: 20/100" in prompt
    assert "Projected Safe Until: 2020" in prompt
    assert timeout == 4.5
    assert max_tokens == 321


@pytest.mark.parametrize("error", [
    ExternalServiceDegraded("timed out"),
    RuntimeError("connection reset"),
])
def test_narrative_failure_falls_back(reference, fully_loaded, error):
    client = FailingClient(error)
    result = ResilienceSimulator(reference, client).simulate(fully_loaded)

    assert client.calls == 1
    assert result.recommendation == FALLBACK_RECOMMENDATION
    assert result.cost_benefit_analysis == FALLBACK_COST_BENEFIT
    assert result.narrative_degraded is True
    # numbers are unaffected
    assert result.resilience_score == 100
    assert result.breakdown.total == 118
    assert result.cutoff_year == 2060
    assert result.material_risk_score == 28


def test_malformed_reply_only_replaces_missing_section(reference, slab_wood):
    client = RecordingClient(reply="1. Design Recommendation:\nElevate by 6 ft.")
    result = ResilienceSimulator(reference, client).simulate(slab_wood)

    assert result.recommendation == "Elevate by 6 ft."
    assert result.cost_benefit_analysis == MISSING_COST_BENEFIT
    assert result.narrative_degraded is True


def test_unstructured_reply_uses_text_as_recommendation(reference, slab_wood):
    client = RecordingClient(reply="Consider raising the building.")
    result = ResilienceSimulator(reference, client).simulate(slab_wood)

    assert result.recommendation == "Consider raising the building."
    assert result.cost_benefit_analysis == MISSING_COST_BENEFIT


def test_missing_recommendation_section(reference, slab_wood):
    client = RecordingClient(reply="2. Cost-Benefit Analysis:\nSpend $8,000.")
    result = ResilienceSimulator(reference, client).simulate(slab_wood)

    assert result.recommendation == MISSING_RECOMMENDATION
    assert result.cost_benefit_analysis == "Spend $8,000."


def test_unknown_scenario_aborts(reference, slab_wood, recording_client):
    simulator = ResilienceSimulator(reference, recording_client, scenario="2.0 - EXTREME")
    with pytest.raises(UnknownScenario):
        simulator.simulate(slab_wood)
    assert recording_client.calls == []


def test_unknown_neighborhood_aborts(reference, recording_client):
    building = BuildingInput(
        foundation_type="slab", elevation_ft=5.0, material="wood", neighborhood="Metairie"
    )
    with pytest.raises(MissingReferenceData):
        ResilienceSimulator(reference, recording_client).simulate(building)
    assert recording_client.calls == []


def test_scenario_choice_changes_cutoff(reference, recording_client):
    building = BuildingInput(
        foundation_type="pier", elevation_ft=7.5, material="metal", neighborhood="Bywater"
    )
    high = ResilienceSimulator(reference, recording_client, scenario="1.0 - HIGH").simulate(building)
    low = ResilienceSimulator(reference, recording_client, scenario="1.0 - LOW").simulate(building)

    # HIGH: 7.71 ft in 2040; LOW: 7.74 ft in 2050
    assert high.cutoff_year == 2040
    assert low.cutoff_year == 2050
    assert high.resilience_score == low.resilience_score


def test_result_is_immutable(reference, slab_wood, recording_client):
    result = ResilienceSimulator(reference, recording_client).simulate(slab_wood)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.resilience_score = 99


def test_result_payload_shape(reference, elevated_concrete, recording_client):
    payload = ResilienceSimulator(reference, recording_client).simulate(elevated_concrete).to_dict()

    assert payload["resilienceScore"] == 85
    assert payload["cutoffYear"] == 2060
    assert payload["materialRiskScore"] == 25
    assert payload["breakdown"] == {"foundation": 30, "elevation": 30, "material": 25, "mitigation": 0}
    assert set(payload) >= {"recommendation", "costBenefitAnalysis", "scenario", "narrativeDegraded"}


def test_from_config_reads_settings(reference, recording_client):
    settings = {
        "DEFAULT_SCENARIO": "1.0 - MED",
        "NARRATIVE_TIMEOUT_SECONDS": 3.0,
        "NARRATIVE_MAX_OUTPUT_TOKENS": 200,
    }
    simulator = ResilienceSimulator.from_config(settings, reference=reference, client=recording_client)

    assert simulator.scenario == "1.0 - MED"
    assert simulator.timeout == 3.0
    assert simulator.max_output_tokens == 200


def test_simulate_without_api_key_uses_fallbacks(reference, elevated_concrete):
    result = simulate(elevated_concrete, reference=reference, settings={"GOOGLE_API_KEY": None})

    assert result.resilience_score == 85
    assert result.recommendation == FALLBACK_RECOMMENDATION
    assert result.cost_benefit_analysis == FALLBACK_COST_BENEFIT
