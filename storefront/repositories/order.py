# storefront/repositories/order.py

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.utils.database import id_in_range
from storefront.models.order import Order, Address, UpiPayment


class OrderRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, id: int) -> Order | None:
        if not id_in_range(id):
            return None
        return await self.db.get(Order, id)

    async def get_by_order_code(self, order_code: str) -> Order | None:
        result = await self.db.execute(select(Order).where(Order.order_id == order_code))
        return result.scalar_one_or_none()

    async def list_complete(self) -> list[Order]:
        result = await self.db.execute(select(Order).where(Order.is_complete.is_(True)).order_by(Order.id))
        return list(result.scalars().all())

    async def list_for_customer(self, customer_id: int) -> list[Order]:
        result = await self.db.execute(
            select(Order)
            .where(Order.customer_id == customer_id, Order.is_complete.is_(True))
            .order_by(Order.id)
        )
        return list(result.scalars().all())

    def add(self, order: Order) -> Order:
        self.db.add(order)
        return order

    def apply(self, order: Order, changes: dict) -> Order:
        """Применяет к заказу только переданные поля."""
        for key, value in changes.items():
            setattr(order, key, value)
        self.db.add(order)
        return order


class AddressRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def add(self, address: Address) -> Address:
        self.db.add(address)
        return address

    async def saved_for_user(self, user_id: int) -> list[Address]:
        result = await self.db.execute(
            select(Address).where(Address.user_id == user_id, Address.is_saved.is_(True)).order_by(Address.id)
        )
        return list(result.scalars().all())


class PaymentRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def add_upi(self, payment: UpiPayment) -> UpiPayment:
        self.db.add(payment)
        return payment

    async def for_order(self, order_id: int) -> list[UpiPayment]:
        result = await self.db.execute(select(UpiPayment).where(UpiPayment.order_id == order_id))
        return list(result.scalars().all())
