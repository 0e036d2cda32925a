from enum import Enum
from models import db
from datetime import datetime


class PaymentType(str, Enum):
    CARD = "card"
    PAYPAL = "paypal"
    WALLET = "wallet"
    CASH = "cash"


class PaymentMethod(db.Model):
    __tablename__ = "payment_method"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    type = db.Column(db.String(10), nullable=False)
    details = db.Column(db.JSON, nullable=False, default=dict)
    is_default = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        from app.utils.masking import mask_payment_details
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "details": mask_payment_details(self.type, self.details or {}),
            "is_default": self.is_default,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
