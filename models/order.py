from enum import Enum
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey
from datetime import datetime
from models import db, CountryPartitioned


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


CANCELLABLE_STATUSES = (
    OrderStatus.PENDING.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PREPARING.value,
)


class Order(CountryPartitioned, db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_user_status", "user_id", "status"),
    )
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurant.id"), nullable=False)
    status = Column(String(20), default=OrderStatus.PENDING.value, nullable=False)
    total_amount = Column(Float, nullable=False)
    delivery_address = Column(String(500), nullable=False)
    notes = Column(Text, nullable=True)
    payment_details = Column(db.JSON(none_as_null=True), nullable=True)
    placed_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    restaurant = db.relationship("Restaurant", lazy=True)
    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", lazy=True)

    def to_dict(self, with_items=True):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "restaurant_id": self.restaurant_id,
            "restaurant": {
                "name": self.restaurant.name,
                "cuisine_type": self.restaurant.cuisine_type,
            } if self.restaurant else None,
            "status": self.status,
            "total_amount": self.total_amount,
            "delivery_address": self.delivery_address,
            "notes": self.notes,
            "country": self.country,
            "payment_details": self.payment_details,
            "placed_at": self.placed_at.isoformat() if self.placed_at else None,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if with_items:
            data["items"] = [oi.to_dict() for oi in self.items]
        return data


class OrderItem(db.Model):
    __tablename__ = "order_item"
    id = db.Column(Integer, primary_key=True)
    order_id = db.Column(Integer, db.ForeignKey("order.id"), nullable=False)
    menu_item_id = db.Column(Integer, db.ForeignKey("menu_item.id"), nullable=False)

    # Snapshot of the menu item at order time
    name = db.Column(db.String(100))
    price = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    subtotal = db.Column(db.Float, nullable=False)

    def to_dict(self):
        return {
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "subtotal": self.subtotal,
        }
