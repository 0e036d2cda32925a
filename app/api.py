from app.routes import (
    auth_bp,
    restaurants_bp,
    orders_bp,
    payments_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(restaurants_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(payments_bp)
