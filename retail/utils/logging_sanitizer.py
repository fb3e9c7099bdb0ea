"""
Logging Sanitizer Utility

Redacts credentials and payment secrets from request payloads before they
reach the log files. JSON bodies may nest objects inside lists (invoice line
items, purchase items), so both are walked.
"""

from typing import Any, Dict, Mapping
from werkzeug.datastructures import MultiDict


REDACTED = '[REDACTED]'

# Keys whose values are never logged
SENSITIVE_FIELDS = {
    'password',
    'confirm_password',
    'current_password',
    'new_password',
    'password_hash',
    'secret',
    'secret_key',
    'token',
    'api_key',
    'access_token',
    'refresh_token',
    'session_id',
    'csrf_token',
    'card_number',
    'cvv',
    'upi_pin',
}


def sanitize_value(value: Any, redact_text: str = REDACTED) -> Any:
    if isinstance(value, Mapping):
        return sanitize_dict(value, redact_text)
    if isinstance(value, (list, tuple)):
        return [sanitize_value(v, redact_text) for v in value]
    return value


def sanitize_dict(data: Mapping[str, Any], redact_text: str = REDACTED) -> Dict[str, Any]:
    """
    Return a copy of ``data`` with sensitive values replaced by ``redact_text``.

    Key matching is case-insensitive and applies at every nesting level.

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'secret123'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return dict(data or {})

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        else:
            sanitized[key] = sanitize_value(value, redact_text)
    return sanitized


def sanitize_form_data(form_data: MultiDict, redact_text: str = REDACTED) -> Dict[str, Any]:
    """Sanitize ``request.form`` (first value per key) for safe logging."""
    return sanitize_dict(form_data.to_dict(flat=True), redact_text)
