from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from retail import db
from retail.business.inventory.purchase_factory import PurchaseFactory
from retail.logger import get_logger
from retail.presentation.routes.api_helpers import handle_error, parse_json
from retail.schemas.inventory import BatchIn, PurchaseIn
from retail.services.inventory.inventory_service import InventoryService

logger = get_logger("retail_manager.routes.inventory")
bp = Blueprint('inventory', __name__)


def batch_to_dict(batch):
    data = batch.to_dict(include_audit_fields=False)
    data['product_name'] = batch.product.name if batch.product else None
    data['unit'] = batch.product.unit if batch.product else None
    data['vendor_name'] = batch.vendor.name if batch.vendor else None
    return data


@bp.get('/inventory/batches')
@login_required
def list_batches():
    batches = InventoryService.list_batches(request.args.get('product_id', type=int))
    return jsonify([batch_to_dict(b) for b in batches])


@bp.post('/inventory/batches')
@login_required
def add_batch():
    try:
        data = parse_json(BatchIn)
        batch = InventoryService.add_batch(data.model_dump(), current_user.id)
        db.session.commit()
    except Exception as e:
        return handle_error(e, "adding inventory batch")
    logger.info(f"User {current_user.username} added batch {batch.id} for product {batch.product_id}")
    return jsonify({'success': True, 'batch': batch_to_dict(batch)}), 201


@bp.get('/inventory/summary')
@login_required
def stock_summary():
    return jsonify([s.to_dict() for s in InventoryService.stock_summary()])


@bp.get('/inventory/low-stock')
@login_required
def low_stock():
    return jsonify([s.to_dict() for s in InventoryService.low_stock_alerts()])


@bp.post('/purchases')
@login_required
def record_purchase():
    try:
        data = parse_json(PurchaseIn)
        batches = PurchaseFactory.record_purchase(
            vendor_id=data.vendor_id,
            items=[item.model_dump() for item in data.items],
            created_by_id=current_user.id,
            purchase_date=data.purchase_date,
            location=data.location,
        )
        db.session.commit()
    except Exception as e:
        return handle_error(e, "recording purchase")
    return jsonify({'success': True, 'batches': [batch_to_dict(b) for b in batches]}), 201
