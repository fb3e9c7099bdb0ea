from datetime import datetime

from retail import db
from retail.data.core.user_created_base import UserCreatedBase


class InventoryBatch(UserCreatedBase):
    """
    A quantity of one product received at one purchase price.

    ``remaining_quantity`` starts equal to ``quantity``. Nothing in the
    application consumes it yet: invoicing does not touch batches.
    """
    __tablename__ = 'inventory_batches'

    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    vendor_id = db.Column(db.Integer, db.ForeignKey('vendors.id'), nullable=True)

    quantity = db.Column(db.Numeric(12, 3), nullable=False, default=0)
    remaining_quantity = db.Column(db.Numeric(12, 3), nullable=False, default=0)
    purchase_price = db.Column(db.Numeric(12, 2), nullable=False)

    purchased_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    expiry_date = db.Column(db.Date, nullable=True)
    location = db.Column(db.String(200), nullable=True)
    batch_number = db.Column(db.String(100), nullable=True)

    product = db.relationship('Product', back_populates='batches')
    vendor = db.relationship('Vendor')

    def __repr__(self):
        return f'<InventoryBatch {self.id}: Product {self.product_id}, Remaining {self.remaining_quantity}>'
