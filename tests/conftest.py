import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')

from app.config import TestingConfig
from app.utils import create_access_token
from models import db, User, Restaurant, MenuItem, PaymentMethod


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    return create_app(TestingConfig)


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(role="member", country="india", password="secret123", email=None, name=None):
        counter["n"] += 1
        user = User(
            name=name or f"{role.title()} {counter['n']}",
            email=email or f"{role}{counter['n']}@test.com",
            role=role,
            country=country,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make


def auth_header(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def headers_for():
    return auth_header


@pytest.fixture
def users(make_user):
    """One actor per role; admin sits in india, managers and members in both."""
    return {
        "admin": make_user("admin", "india"),
        "manager_in": make_user("manager", "india"),
        "manager_us": make_user("manager", "america"),
        "member_in": make_user("member", "india"),
        "member_us": make_user("member", "america"),
    }


@pytest.fixture
def restaurants(app):
    """Two restaurants per country, each with a small menu."""
    created = {}
    for key, country, cuisine in (
        ("in1", "india", "Indian"),
        ("in2", "india", "North Indian"),
        ("us1", "america", "American"),
        ("us2", "america", "Mexican"),
    ):
        r = Restaurant(
            name=f"Restaurant {key}",
            description=f"{cuisine} food",
            address=f"{key} street",
            country=country,
            cuisine_type=cuisine,
            is_active=True,
        )
        db.session.add(r)
        db.session.flush()
        db.session.add_all([
            MenuItem(restaurant_id=r.id, name=f"{key} main", price=10.0, category="Main Course"),
            MenuItem(restaurant_id=r.id, name=f"{key} drink", price=2.5, category="Beverages"),
            MenuItem(restaurant_id=r.id, name=f"{key} gone", price=4.0, category="Sides",
                     is_available=False),
        ])
        created[key] = r
    db.session.commit()
    return {key: r.id for key, r in created.items()}


@pytest.fixture
def menu_of(app):
    """Map of {"main"|"drink"|"gone": menu item id} for a restaurant."""
    def _menu(restaurant_id):
        return {
            mi.name.split(" ", 1)[1]: mi.id
            for mi in MenuItem.query.filter_by(restaurant_id=restaurant_id).all()
        }

    return _menu


@pytest.fixture
def card_for(app):
    def _make(user, is_default=True, number="4532123456789012"):
        method = PaymentMethod(
            user_id=user.id,
            type="card",
            details={"card_number": number, "card_holder_name": user.name, "expiry_date": "12/30"},
            is_default=is_default,
        )
        db.session.add(method)
        db.session.commit()
        return method.id

    return _make
