"""
Main routes: liveness and health checks.
"""

from datetime import datetime, timezone

from flask import jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bidroom import db
from bidroom.routes import main_bp
from bidroom.rooms import room_table


@main_bp.route('/')
def index():
    """Liveness check."""
    return "Server is alive", 200


@main_bp.route('/health')
def health_check():
    """Health check endpoint for load balancers and orchestration.

    Returns:
        JSON with health status, database connectivity and live room count
    """
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({
            'status': 'healthy',
            'database': 'connected',
            'rooms': len(room_table),
            'timestamp': datetime.now(timezone.utc).isoformat()
        })
    except SQLAlchemyError as e:
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected',
            'error': str(e)
        }), 503
