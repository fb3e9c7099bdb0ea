from retail import db
from retail.data.core.user_created_base import UserCreatedBase

# Units a product can be sold in
PRODUCT_UNITS = ('kg', 'gm', 'ltr', 'ml', 'pcs', 'box', 'pack')


class Product(UserCreatedBase):
    """
    Catalogue entry for something the shop buys and sells.

    Stock on hand is not stored here: it is derived from the product's
    inventory batches (see InventoryService.stock_summary).
    """
    __tablename__ = 'products'

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    sku = db.Column(db.String(100), unique=True, nullable=True)
    barcode = db.Column(db.String(100), unique=True, nullable=True)
    hsn_code = db.Column(db.String(20), nullable=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)

    unit = db.Column(db.String(10), nullable=False, default='pcs')
    purchase_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    selling_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    mrp = db.Column(db.Numeric(12, 2), nullable=True)
    tax_rate = db.Column(db.Numeric(5, 2), nullable=True, default=0)

    min_stock_level = db.Column(db.Numeric(12, 3), nullable=True)
    max_stock_level = db.Column(db.Numeric(12, 3), nullable=True)

    is_active = db.Column(db.Boolean, default=True)

    category = db.relationship('Category')
    batches = db.relationship('InventoryBatch', back_populates='product', lazy='dynamic')

    def __repr__(self):
        return f'<Product {self.id}: {self.name}>'
