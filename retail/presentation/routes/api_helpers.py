"""
Shared request/response helpers for the JSON blueprints.

Every error body has the same shape::

    {"success": false, "message": "...", "errors": ["...", ...]}
"""

from datetime import date, datetime

from flask import jsonify, request
from pydantic import ValidationError

from retail import db
from retail.business.errors import (
    DomainValidationError,
    InvalidStatusTransitionError,
    PaymentError,
    RecordNotFoundError,
)
from retail.logger import get_logger
from retail.utils.logging_sanitizer import sanitize_dict

logger = get_logger("retail_manager.routes.api")


def parse_json(schema):
    """Validate the request body against a pydantic model."""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    return schema.model_validate(payload)


def pydantic_errors(exc):
    errors = []
    for err in exc.errors():
        location = '.'.join(str(part) for part in err.get('loc', ()))
        errors.append(f"{location}: {err['msg']}" if location else err['msg'])
    return errors


def error_body(message, errors=None, status=400):
    return jsonify({'success': False, 'message': message, 'errors': list(errors or [])}), status


def handle_error(exc, action):
    """
    Roll back the session and translate an exception into a JSON error.

    Client errors are logged as warnings, anything unexpected as an error
    with traceback.
    """
    db.session.rollback()

    if isinstance(exc, ValidationError):
        errors = pydantic_errors(exc)
        logger.warning(f"Invalid request while {action}: {errors}")
        return error_body('Invalid request', errors, 400)
    if isinstance(exc, DomainValidationError):
        logger.warning(f"Validation failed while {action}: {exc.errors}")
        return error_body(str(exc), exc.errors, 400)
    if isinstance(exc, RecordNotFoundError):
        logger.warning(f"Not found while {action}: {exc}")
        return error_body(str(exc), [str(exc)], 404)
    if isinstance(exc, InvalidStatusTransitionError):
        logger.warning(f"Rejected status change while {action}: {exc}")
        return error_body(str(exc), [str(exc)], 409)
    if isinstance(exc, (PaymentError, ValueError)):
        logger.warning(f"Rejected request while {action}: {exc}")
        return error_body(str(exc), [str(exc)], 400)

    body = request.get_json(silent=True)
    logger.error(
        f"Error {action}: {exc} (payload={sanitize_dict(body) if isinstance(body, dict) else body})",
        exc_info=True,
    )
    return error_body(f'Error {action}', [], 500)


def arg_date(name, default=None):
    """Read an ISO date query argument; raises ValueError on bad input."""
    raw = request.args.get(name)
    if not raw:
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw!r} (expected YYYY-MM-DD)")


def today():
    return datetime.utcnow().date()
