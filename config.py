import os

class Config:
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-key'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Well engine tunables
    STITCH_TOLERANCE = 0.5        # depth units, cross-file sample matching
    PICKUP_TOLERANCE = 50.0       # depth units, pickup weight vs simulation
    PRESSURE_PROFILE_STEPS = 50

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()

class TestingConfig(Config):
    TESTING = True

class ProductionConfig(Config):
    pass

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
