from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf
from pydantic import ValidationError

from retail import limiter, login_manager
from retail.data.core.user import User
from retail.logger import get_logger
from retail.presentation.routes.api_helpers import error_body, pydantic_errors
from retail.schemas.auth import LoginIn
from retail.utils.logging_sanitizer import sanitize_dict

logger = get_logger("retail_manager.auth")
auth = Blueprint('auth', __name__)


@login_manager.unauthorized_handler
def unauthorized():
    return error_body('Authentication required', status=401)


@auth.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    payload = request.get_json(silent=True) or {}
    try:
        credentials = LoginIn.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Login attempt with missing credentials: {sanitize_dict(payload)}")
        return error_body('Please enter both username and password', pydantic_errors(e))

    logger.debug(f"Login attempt for username: {credentials.username}")
    user = User.query.filter_by(username=credentials.username).first()

    if user is None or not user.check_password(credentials.password):
        logger.warning(f"Failed login attempt for username: {credentials.username}")
        return error_body('Invalid username or password', status=401)

    if not user.is_active:
        logger.warning(f"Login attempt for disabled account: {credentials.username}")
        return error_body('Account is disabled', status=403)

    login_user(user)
    logger.info(f"Successful login for user: {user.username}")
    return jsonify({'success': True, 'user': user.to_dict()})


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"User logged out: {username}")
    return jsonify({'success': True})


@auth.route('/csrf-token', methods=['GET'])
def csrf_token():
    """Token for the X-CSRFToken header on state-changing requests."""
    return jsonify({'csrf_token': generate_csrf()})


@auth.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify(current_user.to_dict())
