from typing import Optional
from pydantic import BaseModel, constr
from app.auth.permissions import Country


class RestaurantCreate(BaseModel):
    name: constr(strip_whitespace=True, min_length=2, max_length=100)
    description: Optional[constr(max_length=500)] = None
    address: constr(strip_whitespace=True, min_length=1, max_length=200)
    country: Country
    cuisine_type: constr(strip_whitespace=True, min_length=1, max_length=50)
    image_url: Optional[constr(pattern=r"^https?://")] = None
    is_active: bool = True
