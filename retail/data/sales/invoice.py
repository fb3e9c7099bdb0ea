from retail import db
from retail.data.core.user_created_base import UserCreatedBase

INVOICE_STATUSES = ('draft', 'pending', 'paid', 'cancelled')
PAYMENT_STATUSES = ('pending', 'partial', 'paid', 'overdue')


class Invoice(UserCreatedBase):
    """
    Sales invoice header.

    Totals are stored as computed by InvoiceCalculator at creation time:
    total_amount = subtotal + tax_amount - discount_amount.
    A null customer_id is a walk-in sale.
    """
    __tablename__ = 'invoices'

    invoice_number = db.Column(db.String(50), unique=True, nullable=False)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=True)

    subtotal = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    tax_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    discount_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    status = db.Column(db.String(20), nullable=False, default='draft')
    payment_status = db.Column(db.String(20), nullable=False, default='pending')

    due_date = db.Column(db.Date, nullable=True)
    delivery_date = db.Column(db.Date, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    customer = db.relationship('Customer', back_populates='invoices')
    items = db.relationship(
        'InvoiceItem',
        back_populates='invoice',
        order_by='InvoiceItem.position',
        cascade='all, delete-orphan',
    )
    payments = db.relationship(
        'Payment',
        back_populates='invoice',
        order_by='Payment.payment_date',
        cascade='all, delete-orphan',
    )

    @property
    def is_walk_in(self):
        return self.customer_id is None

    def __repr__(self):
        return f'<Invoice {self.invoice_number}: {self.total_amount} ({self.status}/{self.payment_status})>'

    def to_dict(self, include_relationships=False, include_audit_fields=True):
        data = super().to_dict(include_relationships=include_relationships,
                               include_audit_fields=include_audit_fields)
        if include_relationships:
            data['items'] = [
                dict(item.to_dict(include_audit_fields=False),
                     product_name=item.product.name if item.product else None,
                     unit=item.product.unit if item.product else None)
                for item in self.items
            ]
            data['payments'] = [payment.to_dict(include_audit_fields=False) for payment in self.payments]
        return data
