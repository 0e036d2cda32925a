from typing import List, Optional
from pydantic import BaseModel, Field, constr
from models.order import OrderStatus


class OrderItemIn(BaseModel):
    menu_item_id: int
    quantity: int = Field(ge=1)


class OrderCreate(BaseModel):
    restaurant_id: int
    items: List[OrderItemIn] = Field(min_length=1)
    delivery_address: constr(strip_whitespace=True, min_length=1, max_length=500)
    notes: Optional[constr(max_length=200)] = None


class PlaceOrderRequest(BaseModel):
    payment_method_id: Optional[int] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
