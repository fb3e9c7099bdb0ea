from retail import db
from retail.data.core.user_created_base import UserCreatedBase


class Customer(UserCreatedBase):
    __tablename__ = 'customers'

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    address = db.Column(db.Text, nullable=True)
    gstin = db.Column(db.String(20), nullable=True)
    credit_limit = db.Column(db.Numeric(12, 2), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    invoices = db.relationship('Invoice', back_populates='customer', lazy='dynamic')

    def __repr__(self):
        return f'<Customer {self.id}: {self.name}>'
