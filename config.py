import os
from datetime import timedelta

class Config:
    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///billbook.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_recycle": 300,
        "pool_pre_ping": True,
    }

    # JWT configuration
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', 'development_jwt_secret')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=30)

    # Let flask-restx hand JWT errors over to the flask-jwt-extended handlers
    PROPAGATE_EXCEPTIONS = True
    RESTX_ERROR_404_HELP = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')

    # Number of invoices/expenses listed on the dashboard
    DASHBOARD_RECENT_LIMIT = int(os.environ.get('DASHBOARD_RECENT_LIMIT', 10))

class DevelopmentConfig(Config):
    DEBUG = True
    TESTING = False

class TestingConfig(Config):
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'testing_jwt_secret_key_with_enough_length'

class ProductionConfig(Config):
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
