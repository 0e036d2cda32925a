from typing import Optional
from pydantic import BaseModel, Field, constr, model_validator
from models.payment import PaymentType

# Detail keys each payment type must carry
REQUIRED_DETAILS = {
    PaymentType.CARD: ("card_number", "card_holder_name", "expiry_date"),
    PaymentType.PAYPAL: ("paypal_email",),
    PaymentType.WALLET: ("wallet_id",),
    PaymentType.CASH: (),
}


class PaymentMethodCreate(BaseModel):
    type: PaymentType
    details: dict = Field(default_factory=dict)
    is_default: bool = False

    @model_validator(mode="after")
    def _check_details(self):
        missing = [k for k in REQUIRED_DETAILS[self.type] if not self.details.get(k)]
        if missing:
            raise ValueError(f"missing {self.type.value} details: {', '.join(missing)}")
        return self


class PaymentMethodUpdate(BaseModel):
    details: Optional[dict] = None
    is_default: Optional[bool] = None


class ProcessPaymentRequest(BaseModel):
    order_id: int
    payment_method_id: Optional[int] = None
    amount: float = Field(gt=0)
    currency: Optional[constr(pattern=r"^[A-Z]{3}$")] = None
