from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from retail import db
from retail.logger import get_logger
from retail.presentation.routes.api_helpers import handle_error, parse_json
from retail.schemas.catalog import CategoryIn, ProductIn, ProductUpdate
from retail.services.catalog.category_service import CategoryService
from retail.services.catalog.product_service import ProductService

logger = get_logger("retail_manager.routes.catalog")
bp = Blueprint('catalog', __name__)


@bp.get('/products')
@login_required
def list_products():
    products = ProductService.list_active(request.args.get('q', type=str))
    return jsonify([p.to_dict(include_relationships=True, include_audit_fields=False) for p in products])


@bp.post('/products')
@login_required
def create_product():
    try:
        data = parse_json(ProductIn)
        product = ProductService.create(data.model_dump(exclude_unset=True), current_user.id)
        db.session.commit()
    except Exception as e:
        return handle_error(e, "creating product")
    logger.info(f"User {current_user.username} created product {product.id}")
    return jsonify({'success': True, 'product': product.to_dict()}), 201


@bp.get('/products/<int:product_id>')
@login_required
def get_product(product_id):
    try:
        product = ProductService.get(product_id)
    except Exception as e:
        return handle_error(e, "loading product")
    return jsonify(product.to_dict(include_relationships=True))


@bp.put('/products/<int:product_id>')
@login_required
def update_product(product_id):
    try:
        data = parse_json(ProductUpdate)
        product = ProductService.update(product_id, data.model_dump(exclude_unset=True), current_user.id)
        db.session.commit()
    except Exception as e:
        return handle_error(e, "updating product")
    return jsonify({'success': True, 'product': product.to_dict()})


@bp.delete('/products/<int:product_id>')
@login_required
def deactivate_product(product_id):
    try:
        product = ProductService.deactivate(product_id, current_user.id)
        db.session.commit()
    except Exception as e:
        return handle_error(e, "deactivating product")
    return jsonify({'success': True, 'product': product.to_dict()})


@bp.get('/categories')
@login_required
def list_categories():
    return jsonify([c.to_dict(include_audit_fields=False) for c in CategoryService.list_active()])


@bp.post('/categories')
@login_required
def create_category():
    try:
        data = parse_json(CategoryIn)
        category = CategoryService.create(data.model_dump(exclude_unset=True), current_user.id)
        db.session.commit()
    except Exception as e:
        return handle_error(e, "creating category")
    return jsonify({'success': True, 'category': category.to_dict()}), 201
