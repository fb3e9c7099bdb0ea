from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from retail import db
from retail.business.sales.invoice_calculator import calculate_invoice
from retail.business.sales.invoice_factory import InvoiceFactory
from retail.business.sales.payment_manager import PaymentManager
from retail.business.sales.status_manager import InvoiceStatusManager
from retail.logger import get_logger
from retail.presentation.routes.api_helpers import handle_error, parse_json
from retail.schemas.sales import InvoiceCalculationIn, InvoiceCreate, InvoiceStatusUpdate, PaymentIn
from retail.services.sales.sales_service import SalesService

logger = get_logger("retail_manager.routes.sales")
bp = Blueprint('sales', __name__)


def invoice_summary(invoice):
    data = invoice.to_dict(include_audit_fields=False)
    data['customer_name'] = invoice.customer.name if invoice.customer else 'Walk-in Customer'
    return data


def invoice_detail(invoice):
    data = invoice.to_dict(include_relationships=True)
    data['amount_paid'] = str(PaymentManager.amount_paid(invoice))
    data['balance_due'] = str(PaymentManager.balance_due(invoice))
    return data


@bp.get('/invoices')
@login_required
def list_invoices():
    invoices = SalesService.list_invoices(
        status=request.args.get('status', type=str),
        payment_status=request.args.get('payment_status', type=str),
        customer_id=request.args.get('customer_id', type=int),
    )
    return jsonify([invoice_summary(inv) for inv in invoices])


@bp.post('/invoices/preview')
@login_required
def preview_invoice():
    """Price a draft without saving anything."""
    try:
        data = parse_json(InvoiceCalculationIn)
        totals = calculate_invoice(
            [item.model_dump() for item in data.items],
            data.discount_amount,
            require_positive_price=data.strict_pricing,
        )
    except Exception as e:
        return handle_error(e, "calculating invoice")
    return jsonify({'success': True, 'totals': totals.to_dict()})


@bp.post('/invoices')
@login_required
def create_invoice():
    try:
        data = parse_json(InvoiceCreate)
        invoice = InvoiceFactory.create_invoice(
            items=[item.model_dump() for item in data.items],
            created_by_id=current_user.id,
            customer_id=data.customer_id,
            discount_amount=data.discount_amount,
            notes=data.notes,
            due_date=data.due_date,
            delivery_date=data.delivery_date,
            require_positive_price=data.strict_pricing,
        )
        db.session.commit()
    except Exception as e:
        return handle_error(e, "creating invoice")
    logger.info(f"User {current_user.username} created invoice {invoice.invoice_number}")
    return jsonify({'success': True, 'invoice': invoice_detail(invoice)}), 201


@bp.get('/invoices/<int:invoice_id>')
@login_required
def get_invoice(invoice_id):
    try:
        invoice = SalesService.get_invoice(invoice_id)
    except Exception as e:
        return handle_error(e, "loading invoice")
    return jsonify(invoice_detail(invoice))


@bp.post('/invoices/<int:invoice_id>/status')
@login_required
def update_invoice_status(invoice_id):
    try:
        data = parse_json(InvoiceStatusUpdate)
        InvoiceStatusManager().update_status(
            invoice_id, data.status, data.payment_status, updated_by_id=current_user.id
        )
        db.session.commit()
        invoice = SalesService.get_invoice(invoice_id)
    except Exception as e:
        return handle_error(e, "updating invoice status")
    return jsonify({'success': True, 'invoice': invoice_detail(invoice)})


@bp.post('/invoices/<int:invoice_id>/payments')
@login_required
def record_payment(invoice_id):
    try:
        data = parse_json(PaymentIn)
        payment = PaymentManager().record_payment(
            invoice_id,
            data.amount,
            payment_method=data.payment_method,
            reference_number=data.reference_number,
            payment_date=data.payment_date,
            notes=data.notes,
            created_by_id=current_user.id,
        )
        db.session.commit()
        invoice = SalesService.get_invoice(invoice_id)
    except Exception as e:
        return handle_error(e, "recording payment")
    return jsonify({
        'success': True,
        'payment': payment.to_dict(include_audit_fields=False),
        'invoice': invoice_detail(invoice),
    }), 201
