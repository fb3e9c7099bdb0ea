from datetime import datetime

from retail import db
from retail.data.core.user_created_base import UserCreatedBase


class Payment(UserCreatedBase):
    __tablename__ = 'payments'

    invoice_id = db.Column(db.Integer, db.ForeignKey('invoices.id'), nullable=False)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    payment_method = db.Column(db.String(30), nullable=False)  # cash/card/upi/bank_transfer/cheque
    reference_number = db.Column(db.String(100), nullable=True)
    payment_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    notes = db.Column(db.Text, nullable=True)

    invoice = db.relationship('Invoice', back_populates='payments')

    def __repr__(self):
        return f'<Payment {self.id}: Invoice {self.invoice_id}, {self.amount}>'
