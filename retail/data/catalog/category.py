from retail import db
from retail.data.core.user_created_base import UserCreatedBase


class Category(UserCreatedBase):
    __tablename__ = 'categories'

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    parent_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    parent = db.relationship('Category', remote_side='Category.id')

    def __repr__(self):
        return f'<Category {self.id}: {self.name}>'
