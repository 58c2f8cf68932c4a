"""
Resilience Simulator
====================
Scores a building design for flood resilience, projects the year a sea
level rise scenario overtops it, and asks Gemini for a design
recommendation and cost-benefit analysis.

Author: Floodwise Team
"""

__version__ = "1.0.0"

from .errors import (
    ResilienceError,
    MissingReferenceData,
    UnknownScenario,
    InvalidInput,
    ExternalServiceDegraded
)
from .schemas import (
    BuildingInput,
    FoundationType,
    MaterialType,
    MitigationFeature,
    ScoreBreakdown,
    ScoringResult,
    SimulationResult
)
from .reference_data import ReferenceData, default_reference_data, get_reference_data, load_reference_data
from .scoring import evaluate, elevation_score, material_risk_score
from .timeline import project_cutoff_year, flood_lines
from .prompt import build_prompt
from .narrative import GeminiNarrativeClient, parse_narrative
from .simulate import ResilienceSimulator, simulate

__all__ = [
    'ResilienceError',
    'MissingReferenceData',
    'UnknownScenario',
    'InvalidInput',
    'ExternalServiceDegraded',
    'BuildingInput',
    'FoundationType',
    'MaterialType',
    'MitigationFeature',
    'ScoreBreakdown',
    'ScoringResult',
    'SimulationResult',
    'ReferenceData',
    'default_reference_data',
    'get_reference_data',
    'load_reference_data',
    'evaluate',
    'elevation_score',
    'material_risk_score',
    'project_cutoff_year',
    'flood_lines',
    'build_prompt',
    'GeminiNarrativeClient',
    'parse_narrative',
    'ResilienceSimulator',
    'simulate'
]
