"""
Routes package for the Retail Manager
JSON API blueprints, one per business area, all mounted under /api
"""

from flask import jsonify

from retail.logger import get_logger

logger = get_logger("retail_manager.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from . import catalog, parties, inventory, sales, reports

    app.register_blueprint(catalog.bp, url_prefix='/api')
    app.register_blueprint(parties.bp, url_prefix='/api')
    app.register_blueprint(inventory.bp, url_prefix='/api')
    app.register_blueprint(sales.bp, url_prefix='/api')
    app.register_blueprint(reports.bp, url_prefix='/api')

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'message': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'message': 'Method not allowed'}), 405

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({'success': False, 'message': f'Too many requests: {error.description}'}), 429

    logger.info("Route blueprints registered")
