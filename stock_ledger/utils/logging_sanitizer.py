"""
Logging Sanitizer Utility

Redacts credentials and tokens from request payloads before they are logged.
"""

from typing import Dict, Any, Optional


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'pwd',
    'passwd',
    'secret',
    'token',
    'api_key',
    'apikey',
    'api_token',
    'auth_token',
    'access_token',
    'refresh_token',
    'authorization',
    'session_id',
    'csrf_token',
}


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Keys are matched case-insensitively; nested dictionaries and lists of
    dictionaries are sanitized recursively.

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'stock2025'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_dict(item, redact_text) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized


def sanitize_json_payload(payload: Optional[Any], redact_text: str = '[REDACTED]') -> Any:
    """
    Sanitize a decoded JSON request body for safe logging.

    Non-dict payloads (None, lists, scalars) are returned unchanged since they
    carry no field names to redact.
    """
    if isinstance(payload, dict):
        return sanitize_dict(payload, redact_text)
    return payload
