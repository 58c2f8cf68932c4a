"""
Shared fixtures for the resilience simulator tests.
"""

import pytest

from app import create_app
from resilience.errors import ExternalServiceDegraded
from resilience.narrative import NarrativeClient
from resilience.reference_data import (
    ReferenceData, MaterialProfile, MitigationProfile, NeighborhoodProfile,
    default_reference_data
)
from resilience.schemas import BuildingInput, FoundationType, MaterialType, MitigationFeature


WELL_FORMED_REPLY = """1. Design Recommendation:
Raise the finished floor by 2 ft and add flood vents.

2. Cost-Benefit Analysis:
The extra $9,200 pays for itself after one avoided flood."""


class RecordingClient(NarrativeClient):
    """Returns a canned reply and records every call"""

    def __init__(self, reply=WELL_FORMED_REPLY):
        self.reply = reply
        self.calls = []

    def generate(self, prompt, timeout, max_output_tokens):
        self.calls.append((prompt, timeout, max_output_tokens))
        return self.reply


class FailingClient(NarrativeClient):
    """Raises the given exception on every call"""

    def __init__(self, error=None):
        self.error = error or ExternalServiceDegraded("request timed out")
        self.calls = 0

    def generate(self, prompt, timeout, max_output_tokens):
        self.calls += 1
        raise self.error


@pytest.fixture
def reference():
    return default_reference_data()


@pytest.fixture
def small_reference():
    """Sparse catalog: no composite material, no sump pump, shuffled scenario years"""
    return ReferenceData.build(
        foundations={"slab": 10, "pier": 20},
        materials={
            "wood": MaterialProfile(10, "low", "Wood rots."),
            "concrete": MaterialProfile(25, "high", "Concrete resists water."),
        },
        mitigation={
            "floodVents": MitigationProfile(12, "high", "Vents relieve pressure."),
        },
        neighborhoods={
            "Harbor": NeighborhoodProfile(5.0, 0.25),
        },
        scenarios={
            "test": {2040: 1.5, 2020: 0.5, 2030: 1.0},
        },
    )


@pytest.fixture
def elevated_concrete():
    """Bywater (BFE 6.0) at 16 ft: net elevation exactly 10 ft"""
    return BuildingInput(
        foundation_type=FoundationType.ELEVATED,
        elevation_ft=16.0,
        material=MaterialType.CONCRETE,
        neighborhood="Bywater",
    )


@pytest.fixture
def slab_wood():
    """Bywater at 6 ft: net elevation 0"""
    return BuildingInput(
        foundation_type=FoundationType.SLAB,
        elevation_ft=6.0,
        material=MaterialType.WOOD,
        neighborhood="Bywater",
    )


@pytest.fixture
def fully_loaded():
    """Scores above 100 before capping"""
    return BuildingInput(
        foundation_type=FoundationType.ELEVATED,
        elevation_ft=16.0,
        material=MaterialType.COMPOSITE,
        neighborhood="Bywater",
        mitigation_features=frozenset(MitigationFeature),
    )


@pytest.fixture
def recording_client():
    return RecordingClient()


@pytest.fixture
def app(reference, recording_client):
    app = create_app('testing', reference=reference, narrative_client=recording_client)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def payload():
    return {
        "foundationType": "elevated",
        "elevationFt": 16,
        "material": "concrete",
        "mitigationFeatures": ["floodVents"],
        "neighborhood": "Bywater",
    }
