# storefront/models/order.py

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func
from storefront.utils.database import Base

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)              # автоинкремент

    order_id     = Column(String, unique=True, index=True)          # RAYA/2025/ORD/0001
    customer_id  = Column(Integer, index=True, nullable=False)      # Покупатель
    product_id   = Column(Integer, index=True, nullable=False)      # Товар
    address_id   = Column(Integer, nullable=True)                   # Адрес доставки
    payment_type = Column(String, nullable=True)                    # UPI / cod
    payment_status = Column(String, default="pending")              # pending / paid
    order_status = Column(String, default="Processing")             # Processing, Confirmed, ...
    order_date   = Column(String, nullable=True)                    # 18-10-2025|14:05
    delivered_date = Column(String, default="")                     # Ожидаемая дата доставки
    track_id     = Column(String, default="")                       # Трек-номер
    size         = Column(String, nullable=True)
    qty          = Column(Integer, default=1)
    is_complete  = Column(Boolean, default=False)                   # true после выбора оплаты
    cancellation_reason = Column(Text, default="")
    created_at   = Column(DateTime(timezone=True), server_default=func.now())


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)

    user_id  = Column(Integer, index=True, nullable=True)
    type     = Column(String, default="Order Address")
    name     = Column(String, nullable=True)
    address  = Column(Text, nullable=True)
    city     = Column(String, nullable=True)
    landmark = Column(String, nullable=True)
    district = Column(String, nullable=True)
    state    = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    phone    = Column(String, nullable=True)
    is_saved = Column(Boolean, default=False)                       # показывать в списке адресов


class UpiPayment(Base):
    __tablename__ = "upi_payments"

    id = Column(Integer, primary_key=True, index=True)

    order_id          = Column(Integer, index=True, nullable=False)  # orders.id
    screenshot_base64 = Column(Text, nullable=True)                  # скриншот оплаты
    screenshot_name   = Column(String, nullable=True)
    date              = Column(String, nullable=True)
