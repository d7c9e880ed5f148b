"""
Development server entry point.

Runs the Flask app under the Socket.IO server so websocket clients can
connect. For production deployment, use wsgi.py.

Usage:
    python run.py

Environment Variables:
    FLASK_CONFIG: Configuration to use ('development', 'production'). Defaults to 'development'.
    PORT: Port to listen on. Defaults to 5000.
"""

import os

from bidroom import create_app, socketio

config_name = os.environ.get('FLASK_CONFIG', 'development')
app = create_app(config_name)

if __name__ == '__main__':
    debug = config_name == 'development'
    port = int(os.environ.get('PORT', 5000))
    socketio.run(app, debug=debug, host='0.0.0.0', port=port)
