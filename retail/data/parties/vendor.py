from retail import db
from retail.data.core.user_created_base import UserCreatedBase


class Vendor(UserCreatedBase):
    __tablename__ = 'vendors'

    name = db.Column(db.String(200), nullable=False)
    contact_person = db.Column(db.String(200), nullable=True)
    email = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    address = db.Column(db.Text, nullable=True)
    gstin = db.Column(db.String(20), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    def __repr__(self):
        return f'<Vendor {self.id}: {self.name}>'
