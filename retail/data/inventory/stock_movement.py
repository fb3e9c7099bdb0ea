from retail import db
from retail.data.core.user_created_base import UserCreatedBase


class StockMovement(UserCreatedBase):
    """Audit row for every quantity change applied to a product's stock."""
    __tablename__ = 'stock_movements'

    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    batch_id = db.Column(db.Integer, db.ForeignKey('inventory_batches.id'), nullable=True)

    movement_type = db.Column(db.String(30), nullable=False)  # purchase/adjustment
    quantity = db.Column(db.Numeric(12, 3), nullable=False)  # signed

    reference_type = db.Column(db.String(50), nullable=True)
    reference_id = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    product = db.relationship('Product')
    batch = db.relationship('InventoryBatch')

    def __repr__(self):
        return f'<StockMovement {self.movement_type}: Product {self.product_id}, Qty {self.quantity}>'
