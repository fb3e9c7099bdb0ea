from retail import db
from retail.data.core.user_created_base import UserCreatedBase


class InvoiceItem(UserCreatedBase):
    """One product line on an invoice. Immutable once the invoice is created."""
    __tablename__ = 'invoice_items'

    invoice_id = db.Column(db.Integer, db.ForeignKey('invoices.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    batch_id = db.Column(db.Integer, db.ForeignKey('inventory_batches.id'), nullable=True)
    position = db.Column(db.Integer, nullable=False, default=0)

    quantity = db.Column(db.Numeric(12, 3), nullable=False)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False)
    tax_rate = db.Column(db.Numeric(5, 2), nullable=False, default=0)
    # quantity * unit_price * (1 + tax_rate / 100)
    line_total = db.Column(db.Numeric(12, 2), nullable=False)

    invoice = db.relationship('Invoice', back_populates='items')
    product = db.relationship('Product')

    def __repr__(self):
        return f'<InvoiceItem {self.id}: Product {self.product_id} x {self.quantity}>'
