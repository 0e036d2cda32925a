"""
Default data for local development and demos.

Loaded with ``flask seed-db``. Passwords are hashed on insert.
"""
import logging

from app.auth.permissions import Country, Role
from app.utils.db import transactional
from models import db
from models.order import Order, OrderItem
from models.payment import PaymentMethod, PaymentType
from models.restaurant import MenuItem, Restaurant
from models.user import User

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    # Every user belongs to exactly one country, admins included.
    {"name": "Nick Fury", "email": "nick.fury@test.com", "role": Role.ADMIN,
     "country": Country.AMERICA, "password": "admin123"},
    {"name": "Captain Marvel", "email": "captain.marvel@test.com", "role": Role.MANAGER,
     "country": Country.INDIA, "password": "manager123"},
    {"name": "Captain America", "email": "captain.america@test.com", "role": Role.MANAGER,
     "country": Country.AMERICA, "password": "manager123"},
    {"name": "Thanos", "email": "thanos@test.com", "role": Role.MEMBER,
     "country": Country.INDIA, "password": "member123"},
    {"name": "Thor", "email": "thor@test.com", "role": Role.MEMBER,
     "country": Country.INDIA, "password": "member123"},
    {"name": "Travis", "email": "travis@test.com", "role": Role.ADMIN,
     "country": Country.AMERICA, "password": "member123"},
]

DEFAULT_RESTAURANTS = [
    {"name": "Spice Garden", "description": "Authentic Indian cuisine with traditional spices and flavors",
     "address": "123 Delhi Street, New Delhi", "country": Country.INDIA, "cuisine_type": "Indian"},
    {"name": "Mumbai Express", "description": "Fast casual Indian street food and curries",
     "address": "456 Mumbai Road, Mumbai", "country": Country.INDIA, "cuisine_type": "Indian"},
    {"name": "Tandoor Palace", "description": "Premium tandoor grilled dishes and biryanis",
     "address": "789 Bangalore Avenue, Bangalore", "country": Country.INDIA, "cuisine_type": "North Indian"},
    {"name": "American Diner", "description": "Classic American comfort food and burgers",
     "address": "321 Main Street, New York", "country": Country.AMERICA, "cuisine_type": "American"},
    {"name": "Pizza Corner", "description": "Fresh wood-fired pizzas and Italian favorites",
     "address": "654 Broadway, Los Angeles", "country": Country.AMERICA, "cuisine_type": "Italian-American"},
    {"name": "Taco Fiesta", "description": "Authentic Mexican tacos and burritos",
     "address": "987 Sunset Blvd, San Francisco", "country": Country.AMERICA, "cuisine_type": "Mexican"},
]

MENUS = {
    Country.INDIA: [
        ("Butter Chicken", "Creamy tomato-based curry with tender chicken", 12.99, "Main Course"),
        ("Chicken Biryani", "Fragrant basmati rice with spiced chicken", 14.99, "Main Course"),
        ("Palak Paneer", "Cottage cheese in creamy spinach gravy", 11.99, "Vegetarian"),
        ("Naan Bread", "Fresh baked Indian flatbread", 3.99, "Bread"),
        ("Samosa", "Crispy pastry with spiced potato filling", 5.99, "Appetizer"),
        ("Mango Lassi", "Refreshing yogurt drink with mango", 4.99, "Beverages"),
        ("Tandoori Chicken", "Marinated chicken grilled in clay oven", 13.99, "Main Course"),
        ("Dal Makhani", "Rich and creamy black lentil curry", 9.99, "Vegetarian"),
    ],
    Country.AMERICA: [
        ("Classic Burger", "Beef patty with lettuce, tomato, and cheese", 11.99, "Burgers"),
        ("Margherita Pizza", "Fresh mozzarella, tomato sauce, and basil", 13.99, "Pizza"),
        ("Caesar Salad", "Romaine lettuce with caesar dressing and croutons", 8.99, "Salads"),
        ("Buffalo Wings", "Spicy chicken wings with blue cheese dip", 9.99, "Appetizer"),
        ("Fish Tacos", "Grilled fish with cabbage slaw and lime", 12.99, "Mexican"),
        ("Chocolate Milkshake", "Rich chocolate shake with whipped cream", 5.99, "Beverages"),
        ("BBQ Ribs", "Slow-cooked ribs with tangy BBQ sauce", 16.99, "Main Course"),
        ("Onion Rings", "Crispy battered onion rings", 6.99, "Sides"),
    ],
}


def _slug(name: str) -> str:
    return "-".join(name.lower().split())


def _reset():
    for model in (OrderItem, Order, PaymentMethod, MenuItem, Restaurant, User):
        model.query.delete()


def seed_database(reset: bool = False) -> dict:
    counts = {"users": 0, "restaurants": 0, "menu_items": 0, "payment_methods": 0}
    with transactional("Seeding failed"):
        if reset:
            _reset()

        for row in DEFAULT_USERS:
            if User.query.filter_by(email=row["email"]).first():
                continue
            user = User(
                name=row["name"],
                email=row["email"],
                role=row["role"].value,
                country=row["country"].value,
            )
            user.set_password(row["password"])
            db.session.add(user)
            db.session.flush()
            db.session.add(PaymentMethod(
                user_id=user.id,
                type=PaymentType.CARD.value,
                details={
                    "card_number": "4532123456789012",
                    "card_holder_name": user.name,
                    "expiry_date": "12/25",
                },
                is_default=True,
            ))
            counts["users"] += 1
            counts["payment_methods"] += 1

        for row in DEFAULT_RESTAURANTS:
            if Restaurant.query.filter_by(name=row["name"]).first():
                continue
            restaurant = Restaurant(
                name=row["name"],
                description=row["description"],
                address=row["address"],
                country=row["country"].value,
                cuisine_type=row["cuisine_type"],
                image_url=f"https://example.com/{_slug(row['name'])}.jpg",
                is_active=True,
            )
            db.session.add(restaurant)
            db.session.flush()
            counts["restaurants"] += 1
            for name, description, price, category in MENUS[row["country"]]:
                db.session.add(MenuItem(
                    restaurant_id=restaurant.id,
                    name=name,
                    description=description,
                    price=price,
                    category=category,
                    image_url=f"https://example.com/{_slug(name)}.jpg",
                    is_available=True,
                ))
                counts["menu_items"] += 1

    logger.info("Seed complete: %s", counts)
    return counts
