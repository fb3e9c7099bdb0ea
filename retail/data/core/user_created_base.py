from datetime import datetime

from sqlalchemy.ext.declarative import declared_attr

from retail import db
from retail.business.core.data_insertion_mixin import DataInsertionMixin


class UserCreatedBase(db.Model, DataInsertionMixin):
    """
    Abstract base for every business record.

    Tracks who created and last changed a row. Products, parties, batches,
    invoices and payments all inherit it; users do not.
    """

    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    created_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    updated_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)

    @declared_attr
    def created_by(cls):
        return db.relationship('User', foreign_keys=[cls.created_by_id])

    @declared_attr
    def updated_by(cls):
        return db.relationship('User', foreign_keys=[cls.updated_by_id])

    def touch(self, user_id):
        """Record ``user_id`` as the last editor."""
        self.updated_by_id = user_id
        self.updated_at = datetime.utcnow()
        return self
