"""
Customer and vendor endpoints.

Both resources share one set of view functions, registered once per
resource with its own schema and service.
"""

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from retail import db
from retail.presentation.routes.api_helpers import handle_error, parse_json
from retail.schemas.parties import CustomerIn, CustomerUpdate, VendorIn, VendorUpdate
from retail.services.parties.party_service import CustomerService, VendorService

bp = Blueprint('parties', __name__)


def register_party_routes(resource, key, service, create_schema, update_schema):

    @login_required
    def list_records():
        records = service.list_active(request.args.get('q', type=str))
        return jsonify([r.to_dict(include_audit_fields=False) for r in records])

    @login_required
    def create_record():
        try:
            data = parse_json(create_schema)
            record = service.create(data.model_dump(exclude_unset=True), current_user.id)
            db.session.commit()
        except Exception as e:
            return handle_error(e, f"creating {key}")
        return jsonify({'success': True, key: record.to_dict()}), 201

    @login_required
    def get_record(record_id):
        try:
            record = service.get(record_id)
        except Exception as e:
            return handle_error(e, f"loading {key}")
        return jsonify(record.to_dict())

    @login_required
    def update_record(record_id):
        try:
            data = parse_json(update_schema)
            record = service.update(record_id, data.model_dump(exclude_unset=True), current_user.id)
            db.session.commit()
        except Exception as e:
            return handle_error(e, f"updating {key}")
        return jsonify({'success': True, key: record.to_dict()})

    bp.add_url_rule(f'/{resource}', f'list_{resource}', list_records, methods=['GET'])
    bp.add_url_rule(f'/{resource}', f'create_{key}', create_record, methods=['POST'])
    bp.add_url_rule(f'/{resource}/<int:record_id>', f'get_{key}', get_record, methods=['GET'])
    bp.add_url_rule(f'/{resource}/<int:record_id>', f'update_{key}', update_record, methods=['PUT'])


register_party_routes('customers', 'customer', CustomerService, CustomerIn, CustomerUpdate)
register_party_routes('vendors', 'vendor', VendorService, VendorIn, VendorUpdate)
