# storefront/schemas/user.py

from typing import Optional
from storefront.schemas.base import CamelModel

class UserCreate(CamelModel):
    """
    Покупатель. Авторизация вне этого сервиса, храним только контакты.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

class UserResponse(UserCreate):
    id: int

class Address(CamelModel):
    id: int
    user_id: Optional[int] = None
    type: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    landmark: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    is_saved: bool = False
