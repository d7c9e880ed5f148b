import os


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///auction.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Super admin (either a bcrypt hash or a plaintext password)
    SUPER_ADMIN_PASSWORD_HASH = os.environ.get('SUPER_ADMIN_PASSWORD_HASH', '')
    SUPER_ADMIN_PASSWORD = os.environ.get('SUPER_ADMIN_PASSWORD', '')

    # Browser client origins for HTTP and socket CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # Run sale/unsell settlement writes on a background task
    SETTLEMENT_ASYNC = True

    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    LOGIN_RATE_LIMIT = '10 per minute'


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SUPER_ADMIN_PASSWORD = 'test-password'
    SETTLEMENT_ASYNC = False
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
