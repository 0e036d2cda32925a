from .auth import auth_bp
from .restaurants import restaurants_bp
from .orders import orders_bp
from .payments import payments_bp


__all__ = [
    'auth_bp',
    'restaurants_bp',
    'orders_bp',
    'payments_bp',
]
