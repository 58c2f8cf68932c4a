"""
Resilience Simulator - Exceptions
Errors raised by the evaluation engine and its collaborators
"""


class ResilienceError(Exception):
    """Base class for simulator errors"""


class MissingReferenceData(ResilienceError):
    """A catalog entry the engine cannot work without is absent"""

    def __init__(self, table: str, key: str):
        self.table = table
        self.key = key
        super().__init__(f"No '{key}' entry in {table} reference data")


class UnknownScenario(ResilienceError):
    """Requested sea level rise scenario is not modeled"""

    def __init__(self, scenario: str):
        self.scenario = scenario
        super().__init__(f"Unknown sea level scenario: {scenario}")


class InvalidInput(ResilienceError):
    """Request payload could not be turned into a BuildingInput"""


class ExternalServiceDegraded(ResilienceError):
    """Narrative generator failed, timed out or returned nothing"""
