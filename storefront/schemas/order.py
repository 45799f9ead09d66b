# storefront/schemas/order.py

from enum import Enum
from typing import List, Optional
from pydantic import ConfigDict, Field
from storefront.schemas.base import CamelModel
from storefront.utils.database import MAX_ID

class OrderStatus(str, Enum):
    PROCESSING = "Processing"
    CONFIRMED = "Confirmed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

class PaymentType(str, Enum):
    UPI = "UPI"
    COD = "cod"

# ────────────── Оформление заказа ──────────────
class OrderCreate(CamelModel):
    product_id: Optional[int] = Field(None, le=MAX_ID)
    customer_id: Optional[int] = Field(None, le=MAX_ID)
    payment_type: Optional[str] = None
    qty: Optional[int] = Field(1, ge=1, le=MAX_ID)
    size: Optional[str] = None

    # адрес: либо address_id, либо поля нового адреса
    address_id: Optional[int] = Field(None, le=MAX_ID)
    save_address: bool = False
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    landmark: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

class OrderCreatedResponse(CamelModel):
    message: str
    order_id: str = Field(serialization_alias="orderID")

# ────────────── Подтверждение оплаты ──────────────
class PaymentDetails(CamelModel):
    order_id: str
    payment_type: Optional[str] = None
    screenshot_base64: Optional[str] = None
    screenshot_name: Optional[str] = None

# ────────────── Правка заказа администратором ──────────────
class OrderAdminUpdate(CamelModel):
    """Разрешённые для правки поля. Неизвестные поля отклоняются."""
    model_config = ConfigDict(extra="forbid")

    order_status: Optional[OrderStatus] = None
    payment_status: Optional[str] = None
    track_id: Optional[str] = None
    delivered_date: Optional[str] = None
    cancellation_reason: Optional[str] = None
    size: Optional[str] = None
    qty: Optional[int] = Field(None, ge=1, le=MAX_ID)

class OrderCancel(CamelModel):
    reason: Optional[str] = None

# ────────────── Ответы ──────────────
class Order(CamelModel):
    id: int
    order_id: str
    customer_id: int
    product_id: int
    address_id: Optional[int] = None
    payment_type: Optional[str] = None
    payment_status: Optional[str] = None
    order_status: Optional[str] = None
    order_date: Optional[str] = None
    delivered_date: Optional[str] = None
    track_id: Optional[str] = None
    size: Optional[str] = None
    qty: int
    is_complete: bool
    cancellation_reason: Optional[str] = None

class UpiPayment(CamelModel):
    id: int
    screenshot_name: Optional[str] = None
    screenshot_base64: Optional[str] = None
    date: Optional[str] = None

class OrderDetail(Order):
    payments: List[UpiPayment] = []

class OrderSummary(CamelModel):
    id: int
    order_id: str
    product_id: str
    customer_name: str
    quantity: int
    order_date: Optional[str] = None
    order_status: Optional[str] = None
