import logging
import os
from flask import Flask
from config import config
from src.routes.survey import survey_bp
from src.routes.casing import casing_bp
from src.routes.fluids import fluids_bp
from src.routes.simulations import simulations_bp
from src.routes.export import export_bp
from src.routes.calculations import calculations_bp


def create_app(config_name=None):
    app = Flask(__name__)

    # Configure the app from the named config class, then environment overrides
    config_name = config_name or os.environ.get('APP_CONFIG', 'default')
    app.config.from_object(config[config_name])
    if 'DEBUG' in os.environ:
        app.config['DEBUG'] = os.environ['DEBUG'].lower() == 'true'
    if 'TESTING' in os.environ:
        app.config['TESTING'] = os.environ['TESTING'].lower() == 'true'

    logging.basicConfig(level=app.config['LOG_LEVEL'])

    app.register_blueprint(survey_bp, url_prefix='/api/v1/survey')
    app.register_blueprint(casing_bp, url_prefix='/api/v1/casing')
    app.register_blueprint(fluids_bp, url_prefix='/api/v1/fluids')
    app.register_blueprint(simulations_bp, url_prefix='/api/v1/simulations')
    app.register_blueprint(export_bp, url_prefix='/api/v1/export')
    app.register_blueprint(calculations_bp, url_prefix='/api/v1/calculations')

    @app.route('/healthz', methods=['GET'])
    def health_check():
        return {'status': 'healthy'}, 200

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
