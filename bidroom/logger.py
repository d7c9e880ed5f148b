"""
Logging for the auction room server.

Every module gets its logger from get_logger(). Records are tagged with the
connection that caused them: the Socket.IO sid for room events, the method
and path for HTTP requests. Production writes one JSON object per line;
everything else writes plain text.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

USE_JSON_LOGGING = os.environ.get('FLASK_CONFIG') == 'production'
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

TEXT_FORMAT = '[%(asctime)s] %(levelname)s [%(origin)s] %(name)s: %(message)s'


def _origin() -> Dict[str, str]:
    """Describe the connection currently being served, if any."""
    try:
        from flask import has_request_context, request
    except ImportError:
        return {}
    if not has_request_context():
        return {}

    sid = getattr(request, 'sid', None)
    if sid:
        return {'sid': sid}
    return {'method': request.method, 'path': request.path}


class JSONFormatter(logging.Formatter):
    """One JSON document per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update(getattr(record, 'origin_fields', {}))

        audit = getattr(record, 'audit', None)
        if audit:
            entry['audit'] = audit

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class RequestContextFilter(logging.Filter):
    """Attach the originating sid or request path to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        fields = _origin()
        record.origin_fields = fields
        if 'sid' in fields:
            record.origin = f"sid={fields['sid']}"
        elif fields:
            record.origin = f"{fields['method']} {fields['path']}"
        else:
            record.origin = '-'
        return True


def setup_logger(
    name: str,
    level: Optional[Union[int, str]] = None,
    use_json: Optional[bool] = None
) -> logging.Logger:
    """
    Configure a logger once and return it.

    Args:
        name: Logger name, usually the calling module's __name__
        level: Level name or number (default: LOG_LEVEL from the environment)
        use_json: Force JSON output (default: on in production)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level or LOG_LEVEL)
    logger.propagate = False
    logger.addFilter(RequestContextFilter())

    handler = logging.StreamHandler(sys.stdout)
    if (USE_JSON_LOGGING if use_json is None else use_json):
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger for a module.

    Example:
        from bidroom.logger import get_logger
        logger = get_logger(__name__)
        logger.info("Round started")
    """
    return setup_logger(name)


def get_audit_logger() -> logging.Logger:
    """Logger for writes to durable sale fields and cascading deletes."""
    return get_logger('bidroom.audit')


def log_audit(
    action: str,
    entity_type: str,
    entity_id: Optional[Union[int, str]] = None,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """Record an audit event.

    The text form reads ``AUDIT: player_sold on player (id=7) - {...}``;
    the JSON form carries the same fields under ``audit``.

    Example:
        log_audit('player_sold', 'player', player_id, {
            'team_id': team_id,
            'amount': amount
        })
    """
    message = f"AUDIT: {action} on {entity_type}"
    if entity_id is not None:
        message += f" (id={entity_id})"
    if details:
        message += f" - {json.dumps(details, default=str)}"

    get_audit_logger().info(message, extra={'audit': {
        'action': action,
        'entity_type': entity_type,
        'entity_id': entity_id,
        'details': details or {},
    }})
