from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import validates

db = SQLAlchemy()


class CountryPartitioned:
    """Mixin for records that live in exactly one country partition."""

    country = db.Column(db.String(20), nullable=False, index=True)

    @validates("country")
    def _validate_country(self, key, value):
        value = getattr(value, "value", value)
        if self.country is not None and value != self.country:
            raise ValueError("country cannot be changed once assigned")
        return value


# Re-export common models for convenience
from .user import User  # noqa: E402,F401
from .restaurant import Restaurant, MenuItem  # noqa: E402,F401
from .order import Order, OrderItem, OrderStatus  # noqa: E402,F401
from .payment import PaymentMethod, PaymentType  # noqa: E402,F401
