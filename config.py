import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # API Keys
    GOOGLE_API_KEY = os.environ.get('GOOGLE_API_KEY')

    # Narrative generation
    NARRATIVE_MODEL = os.environ.get('NARRATIVE_MODEL') or 'gemini-1.5-flash'
    NARRATIVE_TIMEOUT_SECONDS = float(os.environ.get('NARRATIVE_TIMEOUT_SECONDS') or 10)
    NARRATIVE_MAX_OUTPUT_TOKENS = int(os.environ.get('NARRATIVE_MAX_OUTPUT_TOKENS') or 600)
    NARRATIVE_TEMPERATURE = float(os.environ.get('NARRATIVE_TEMPERATURE') or 1.0)

    # Simulation settings
    DEFAULT_SCENARIO = os.environ.get('DEFAULT_SCENARIO') or '1.0 - HIGH'
    REFERENCE_DATA_PATH = os.environ.get('REFERENCE_DATA_PATH')  # None -> built-in dataset

class DevelopmentConfig(Config):
    DEBUG = True

class ProductionConfig(Config):
    DEBUG = False

class TestingConfig(Config):
    TESTING = True
    GOOGLE_API_KEY = None
    REFERENCE_DATA_PATH = None

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def load_settings(config_name='default'):
    """Uppercase settings of a config class as a plain dict"""
    cls = config[config_name]
    return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}
