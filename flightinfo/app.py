"""
Flight Information API Flask Application.

Main entry point for the web application. Initializes:
- Database schema
- API routes
- JSON error handlers

Usage:
    python -m flightinfo.app

Or with gunicorn:
    gunicorn 'flightinfo.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from flightinfo.config import config
from flightinfo.models import configure_database, init_db
from flightinfo.api import flights_bp
from flightinfo.errors import register_error_handlers

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None) -> Flask:
    """
    Application factory for Flask.

    Args:
        database_url: SQLAlchemy URL overriding DATABASE_URL.
                      Tests pass 'sqlite://' for an in-memory database.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key
    app.json.sort_keys = False  # Keep envelope field order

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': config.api.origins}})

    # Initialize database
    if database_url:
        configure_database(database_url)
    logger.info('Initializing database...')
    init_db()

    # Register API blueprints
    app.register_blueprint(flights_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    register_error_handlers(app)

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Starting Flight Information API on http://localhost:{config.port}')
    logger.info(f'Flights: http://localhost:{config.port}/api/flights')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
