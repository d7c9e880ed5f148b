"""
Request and payload helpers shared by HTTP routes and socket handlers.

The parse_* helpers return ``(value, error)`` pairs so callers decide
which exception to raise: ValidationError on HTTP, BidRejected in rooms.
"""

import math
from typing import Any, Dict, List, Optional, Tuple, Union

from flask import jsonify, request

Number = Union[int, float]


# ==================== RESPONSES ====================

def success_response(data: Optional[Dict[str, Any]] = None, **fields: Any):
    """
    JSON body ``{'success': True, ...}`` with status 200.

    Keys from ``data`` and keyword fields are merged into the body, so
    ``success_response(team=team)`` yields ``{'success': True, 'team': ...}``.
    """
    body: Dict[str, Any] = {'success': True}
    if data:
        body.update(data)
    body.update({k: v for k, v in fields.items() if v is not None})
    return jsonify(body), 200


# ==================== PAYLOADS ====================

def get_json_body() -> Dict[str, Any]:
    """The JSON request body, or an empty dict when absent or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> Optional[str]:
    """Error message naming the missing or empty fields, or None."""
    missing = [
        f for f in required_fields
        if f not in data or data[f] is None or data[f] == ''
    ]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    return None


def parse_amount(value: Any, field_name: str = 'amount') -> Tuple[Optional[Number], Optional[str]]:
    """
    Validate a non-negative, finite money amount.

    Integers stay integers; numeric strings are accepted. Booleans are
    rejected even though Python treats them as ints.

    Returns:
        Tuple of (amount or None, error message or None)
    """
    if value is None or isinstance(value, bool):
        return None, f"{field_name} must be a number"

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None, f"{field_name} must be a number"
        if number.is_integer():
            number = int(number)
    else:
        return None, f"{field_name} must be a number"

    if isinstance(number, float) and not math.isfinite(number):
        return None, f"{field_name} must be a finite number"
    if number < 0:
        return None, f"{field_name} must be non-negative"
    return number, None


def parse_id(value: Any, field_name: str) -> Tuple[Optional[int], Optional[str]]:
    """
    Validate and convert a record identifier to a positive integer.

    Returns:
        Tuple of (id or None, error message or None)
    """
    if value is None or value == '' or isinstance(value, bool):
        return None, f"{field_name} is required"
    try:
        int_value = int(str(value).strip())
    except (TypeError, ValueError):
        return None, f"{field_name} must be a valid id"
    if int_value <= 0:
        return None, f"{field_name} must be a valid id"
    return int_value, None
