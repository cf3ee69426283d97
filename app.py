import os
import logging
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy.orm import DeclarativeBase
from flask_jwt_extended import JWTManager
from flask_marshmallow import Marshmallow
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
from flask_restx import Api

logger = logging.getLogger(__name__)

# Database setup
class Base(DeclarativeBase):
    pass

db = SQLAlchemy(model_class=Base)
migrate = Migrate()
ma = Marshmallow()
jwt = JWTManager()

def create_app(config_object='config.DevelopmentConfig', **overrides):
    # Create and configure the app
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)

    # Configure logging
    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'DEBUG'))

    # Set secret key from environment or default
    app.secret_key = os.environ.get("SESSION_SECRET") or app.config['JWT_SECRET_KEY']

    # Fix proxy issues
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    ma.init_app(app)
    jwt.init_app(app)
    CORS(app)

    # API documentation setup
    authorizations = {
        'jwt': {
            'type': 'apiKey',
            'in': 'header',
            'name': 'Authorization',
            'description': "Type in the *'Value'* input box below: **'Bearer &lt;JWT&gt;'**, where JWT is the token"
        }
    }

    api = Api(
        app,
        version='1.0',
        title='Billbook API',
        description='Billing and expense tracking API for small businesses',
        doc='/api/docs',
        authorizations=authorizations,
        security='jwt'
    )

    from api import register_namespaces
    register_namespaces(api)

    # Register error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(error):
        logger.error(f"Server error: {error}")
        return {'error': 'Internal server error'}, 500

    # Create database tables within app context
    with app.app_context():
        db.create_all()

    return app
