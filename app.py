from flask import Flask
import logging

from config import config
from resilience.api import resilience_bp, EXTENSION_KEY
from resilience.simulate import ResilienceSimulator


def create_app(config_name='default', reference=None, narrative_client=None):
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Initialize services
    simulator = ResilienceSimulator.from_config(
        app.config,
        reference=reference,
        client=narrative_client
    )
    app.extensions[EXTENSION_KEY] = simulator

    # Register blueprints
    app.register_blueprint(resilience_bp)

    app.logger.info(
        f"Resilience simulator ready: {len(simulator.reference.neighborhoods)} neighborhoods, "
        f"default scenario '{simulator.scenario}'"
    )
    return app


if __name__ == '__main__':
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
        handlers=[
            logging.FileHandler('floodwise.log'),
            logging.StreamHandler()
        ]
    )

    app = create_app()
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000)
