"""
Rate limiting for the HTTP API.

The limiter is bound to the app in create_app(). Storage and the on/off
switch come from the RATELIMIT_* config keys; the login routes add their
own tighter limit from LOGIN_RATE_LIMIT.
"""

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, default_limits=["300 per minute"])
