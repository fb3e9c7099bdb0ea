"""
Pytest configuration and fixtures

Each test gets a fresh application on an in-memory SQLite database with the
admin user seeded.
"""
from decimal import Decimal

import pytest

from retail import create_app
from retail import db as _db
from retail.build import ensure_admin_user

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin123456789'


@pytest.fixture(scope='function')
def app():
    """Create Flask application for testing"""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'SESSION_COOKIE_SECURE': False,
        'ADMIN_USERNAME': ADMIN_USERNAME,
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
    })

    with app.app_context():
        _db.create_all()
        ensure_admin_user(app)
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def db(app):
    return _db


@pytest.fixture(scope='function')
def admin_user(app):
    from retail.data.core.user import User
    return User.query.filter_by(username=ADMIN_USERNAME).first()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def authenticated_client(client):
    """Test client logged in as the seeded admin"""
    login_user(client)
    return client


def login_user(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    """Helper function to login a user"""
    return client.post('/auth/login', json={'username': username, 'password': password})


@pytest.fixture(scope='function')
def make_product(db, admin_user):
    """Factory for committed products"""
    from retail.data.catalog.product import Product

    def _make(name='Basmati Rice', **fields):
        fields.setdefault('unit', 'kg')
        fields.setdefault('purchase_price', Decimal('70.00'))
        fields.setdefault('selling_price', Decimal('85.00'))
        fields.setdefault('tax_rate', Decimal('0'))
        product = Product.create_from_dict(dict(fields, name=name), user_id=admin_user.id)
        db.session.commit()
        return product

    return _make


@pytest.fixture(scope='function')
def make_vendor(db, admin_user):
    from retail.data.parties.vendor import Vendor

    def _make(name='Agro Traders', **fields):
        vendor = Vendor.create_from_dict(dict(fields, name=name), user_id=admin_user.id)
        db.session.commit()
        return vendor

    return _make


@pytest.fixture(scope='function')
def make_customer(db, admin_user):
    from retail.data.parties.customer import Customer

    def _make(name='Asha Menon', **fields):
        customer = Customer.create_from_dict(dict(fields, name=name), user_id=admin_user.id)
        db.session.commit()
        return customer

    return _make
