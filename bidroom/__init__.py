from flask import Flask
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_socketio import SocketIO

db = SQLAlchemy()
socketio = SocketIO()


def create_app(config_name: str = 'default'):
    """Application factory pattern"""
    from config import config

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Socket handlers must be registered before init_app builds the server
    from bidroom import events  # noqa: F401
    from bidroom.extensions import limiter

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)
    CORS(app, origins=app.config['CORS_ORIGINS'])
    socketio.init_app(app, cors_allowed_origins=app.config['CORS_ORIGINS'])

    # Register blueprints
    from bidroom.routes import main_bp, api_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    from bidroom.errors import register_error_handlers
    register_error_handlers(app)

    from bidroom.db_utils import enforce_foreign_keys

    # Create database tables
    with app.app_context():
        enforce_foreign_keys()
        db.create_all()

    return app
