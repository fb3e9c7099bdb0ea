#!/usr/bin/env python3
"""
Database builder for the Retail Manager
Creates all tables and makes sure the admin account exists
"""

from retail import db
from retail.logger import get_logger

logger = get_logger("retail_manager.build")


def ensure_admin_user(app):
    """
    Create the admin account from ADMIN_USERNAME / ADMIN_PASSWORD if missing.

    Returns:
        User or None: the admin user, or None when no password is configured
    """
    from retail.data.core.user import User

    username = app.config.get('ADMIN_USERNAME') or 'admin'
    admin = User.query.filter_by(username=username).first()
    if admin is not None:
        logger.debug(f"Admin user '{username}' already present")
        return admin

    password = app.config.get('ADMIN_PASSWORD')
    if not password:
        logger.warning("ADMIN_PASSWORD not set - admin user not created. Run 'python generate_env.py'.")
        return None

    admin = User(username=username, full_name='Administrator', role='admin', is_active=True)
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    logger.info(f"Created admin user '{username}'")
    return admin


def build_database(app):
    """Create tables for every registered model, then seed the admin user."""
    with app.app_context():
        logger.info("Creating database tables")
        try:
            db.create_all()
            ensure_admin_user(app)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Database build failed: {e}", exc_info=True)
            raise
        logger.info("Database build complete")
