"""
Flask API for Building Resilience Simulation
=============================================
Endpoints for running a design simulation and listing the design options.

Author: Floodwise Team
"""

import logging

from flask import Blueprint, request, jsonify, current_app

from .errors import InvalidInput, MissingReferenceData, UnknownScenario
from .schemas import BuildingInput

logger = logging.getLogger(__name__)

# Create Blueprint
resilience_bp = Blueprint('resilience', __name__, url_prefix='/api')

EXTENSION_KEY = 'resilience_simulator'


def get_simulator():
    """Simulator registered on the current app by create_app"""
    return current_app.extensions[EXTENSION_KEY]


@resilience_bp.route('/simulate', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
def simulate_design():
    """
    Run a flood resilience simulation.

    Request JSON:
    {
        "foundationType": "slab" | "pier" | "elevated",
        "elevationFt": float,
        "material": "wood" | "metal" | "concrete" | "composite",
        "mitigationFeatures": ["floodVents", "breakawayWalls", "sumpPump"],
        "neighborhood": str
    }
    """
    if request.method != 'POST':
        return jsonify({'error': 'Method Not Allowed. Use POST.'}), 405

    data = request.get_json(silent=True)
    if data is None:
        return jsonify({'error': 'No JSON data provided'}), 400

    try:
        building = BuildingInput.from_dict(data)
    except InvalidInput as e:
        return jsonify({'error': f'Invalid input format: {e}'}), 400

    try:
        result = get_simulator().simulate(building)
    except (MissingReferenceData, UnknownScenario) as e:
        logger.error(f"Simulation rejected: {e}")
        return jsonify({'error': str(e)}), 422
    except Exception:
        logger.exception("Simulation failed")
        return jsonify({'error': 'Simulation failed due to server error.'}), 500

    return jsonify(result.to_dict()), 200


@resilience_bp.route('/options', methods=['GET'])
def get_design_options():
    """Available foundations, materials, mitigation features, neighborhoods and scenarios."""
    simulator = get_simulator()
    options = simulator.reference.options()
    options['defaultScenario'] = simulator.scenario
    return jsonify(options)


@resilience_bp.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})
