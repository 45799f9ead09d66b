# storefront/services/inventory.py

from fastapi import Request

from storefront.models.order import Order as OrderModel
from storefront.repositories.product import ProductRepository

DEDUCT = "deduct"
ADD = "add"


async def adjust_inventory(direction: str, order: OrderModel, request: Request, qty: int | None = None) -> int | None:
    """
    Списывает (deduct) или возвращает (add) на склад количество из заказа.
    Остаток не опускается ниже нуля. Возвращает новый остаток,
    None, если товар заказа не найден (это не ошибка).
    """
    db = request.state.db
    log = request.app.state.log

    amount = int(order.qty if qty is None else qty)
    if direction == DEDUCT:
        delta = -amount
    elif direction == ADD:
        delta = amount
    else:
        raise ValueError(f"Неизвестное направление: {direction}")

    quantity = await ProductRepository(db).adjust_quantity(order.product_id, delta)
    if quantity is None:
        await log.log_warning("inventory", "Товар заказа не найден", {
            "order_id": order.order_id, "product_id": order.product_id
        })
        return None

    await db.commit()
    await log.log_info("inventory", "Остаток изменён", {
        "order_id": order.order_id, "direction": direction, "qty": amount, "quantity": quantity
    })
    return quantity
