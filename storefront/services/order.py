# storefront/services/order.py

from datetime import datetime
from fastapi import HTTPException, Request

from storefront.models.order import Order as OrderModel, Address as AddressModel, UpiPayment as UpiPaymentModel
from storefront.repositories.order import OrderRepository, AddressRepository, PaymentRepository
from storefront.repositories.product import ProductRepository, ImageRepository
from storefront.repositories.user import UserRepository
from storefront.schemas.order import (
    OrderCreate, PaymentDetails, OrderAdminUpdate, OrderCancel, OrderStatus, PaymentType,
    OrderDetail, UpiPayment,
)
from storefront.services.inventory import adjust_inventory, DEDUCT, ADD
from storefront.utils.sequence import next_code, ORDER


def order_timestamp(now: datetime | None = None) -> str:
    """Дата заказа в виде 18-10-2025|14:05."""
    return f"{now or datetime.now():%d-%m-%Y|%H:%M}"


async def _get_order_or_404(id: int, request: Request) -> OrderModel:
    db_order = await OrderRepository(request.state.db).get(id)
    if db_order is None:
        await request.app.state.log.log_error("order", "Заказ не найден", {"id": id})
        raise HTTPException(status_code=404, detail="Order not found")
    return db_order


async def place_order_service(order: OrderCreate, request: Request) -> str:
    """
    Оформление заказа. Возвращает человекочитаемый ID.
    Склад здесь не трогаем: списание происходит при подтверждении оплаты.
    """
    db = request.state.db
    log = request.app.state.log

    if order.product_id is None or order.customer_id is None:
        raise HTTPException(status_code=400, detail="Please fill all required fields")

    # ID выдаём первым: до остальных записей в этой сессии
    order_code = await next_code(db, ORDER)

    address_id = order.address_id
    if not order.address_id or order.save_address:
        db_address = AddressRepository(db).add(AddressModel(
            user_id=order.customer_id,
            type="Order Address",
            name=order.name,
            address=order.address,
            city=order.city,
            landmark=order.landmark,
            district=order.district,
            state=order.state,
            zip_code=order.zip_code,
            phone=order.phone,
            is_saved=order.save_address,
        ))
        await db.flush()
        address_id = order.address_id or db_address.id

    OrderRepository(db).add(OrderModel(
        order_id=order_code,
        customer_id=order.customer_id,
        product_id=order.product_id,
        payment_type=order.payment_type,
        address_id=address_id,
        payment_status="pending",
        order_status=OrderStatus.PROCESSING.value,
        order_date=order_timestamp(),
        delivered_date="",
        track_id="",
        size=order.size,
        qty=order.qty or 1,
        is_complete=False,
        cancellation_reason="",
    ))
    await db.commit()

    await log.log_info("order", "Заказ создан", {"order_id": order_code, "address_id": address_id})
    return order_code


async def confirm_payment_service(details: PaymentDetails, request: Request) -> str:
    """
    Фиксирует способ оплаты заказа и списывает товар со склада.
    UPI: сохраняем скриншот оплаты. cod: оплата при получении.
    """
    db = request.state.db
    log = request.app.state.log
    notifier = request.app.state.notifier
    orders = OrderRepository(db)

    db_order = await orders.get_by_order_code(details.order_id)
    if db_order is None:
        await log.log_error("order", "Заказ для оплаты не найден", {"order_id": details.order_id})
        raise HTTPException(status_code=404, detail="Order not found")

    event_payload = {"order_id": db_order.order_id, "qty": db_order.qty}

    if details.payment_type == PaymentType.UPI.value:
        PaymentRepository(db).add_upi(UpiPaymentModel(
            order_id=db_order.id,
            screenshot_base64=details.screenshot_base64,
            screenshot_name=details.screenshot_name,
            date=order_timestamp(),
        ))
        orders.apply(db_order, {"payment_type": PaymentType.UPI.value, "payment_status": "paid", "is_complete": True})
        await db.commit()

        notifier.send("ORDPRCS", event_payload)
        notifier.send("ORDPYMT", event_payload)
        message = "Payment Request Completed Successfully..."

    elif details.payment_type == PaymentType.COD.value:
        orders.apply(db_order, {"payment_type": PaymentType.COD.value, "is_complete": True})
        await db.commit()

        notifier.send("ORDPRCS", event_payload)
        message = "Order requested...."

    else:
        await log.log_warning("order", "Неизвестный способ оплаты", {
            "order_id": details.order_id, "payment_type": details.payment_type
        })
        raise HTTPException(status_code=400, detail="Unsupported payment type")

    # отдельная запись после обновления заказа, без общей транзакции
    await adjust_inventory(DEDUCT, db_order, request)
    await log.log_info("order", "Оплата подтверждена", {
        "order_id": db_order.order_id, "payment_type": details.payment_type
    })
    return message


async def read_orders_service(request: Request) -> list[dict]:
    """
    Все оформленные (is_complete) заказы с именем покупателя и кодом товара.
    """
    db = request.state.db
    log = request.app.state.log

    orders = await OrderRepository(db).list_complete()
    users = {u.id: u for u in await UserRepository(db).list_by_ids(list({o.customer_id for o in orders}))}
    products = {p.id: p for p in await ProductRepository(db).list_by_ids(list({o.product_id for o in orders}))}

    result = []
    for o in orders:
        user = users.get(o.customer_id)
        product = products.get(o.product_id)
        result.append({
            "id": o.id,
            "order_id": o.order_id,
            "product_id": product.product_id if product else "Unknown",
            "customer_name": (user.name or "Unknown") if user else "Unknown",
            "quantity": o.qty,
            "order_date": o.order_date,
            "order_status": o.order_status,
        })

    await log.log_info("order", f"{len(result)} заказов загружено")
    return result


async def read_order_service(id: int, request: Request) -> OrderDetail:
    """Заказ вместе с присланными подтверждениями UPI-оплаты."""
    db_order = await _get_order_or_404(id, request)
    payments = await PaymentRepository(request.state.db).for_order(db_order.id)

    detail = OrderDetail.model_validate(db_order)
    detail.payments = [UpiPayment.model_validate(p) for p in payments]
    await request.app.state.log.log_info("order", "Заказ загружен", {"id": id, "payments": len(payments)})
    return detail


async def admin_edit_order_service(id: int, order_update: OrderAdminUpdate, request: Request) -> OrderModel:
    """
    Правка заказа администратором.

    Смена статуса двигает склад: Processing списывает, Cancelled возвращает,
    Confirmed шлёт уведомление об отправке. Каждый вызов с таким статусом
    повторяет движение склада.
    """
    db = request.state.db
    log = request.app.state.log

    db_order = await _get_order_or_404(id, request)
    previous_qty = db_order.qty

    changes = order_update.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    OrderRepository(db).apply(db_order, changes)
    await db.commit()
    await log.log_info("order", "Заказ обновлён", {"id": id, "changes": changes})

    status = changes.get("order_status")
    if status == OrderStatus.PROCESSING.value:
        await adjust_inventory(DEDUCT, db_order, request, qty=previous_qty)
    elif status == OrderStatus.CANCELLED.value:
        await adjust_inventory(ADD, db_order, request, qty=previous_qty)
    elif status == OrderStatus.CONFIRMED.value:
        request.app.state.notifier.send("PRDDISP", {"order_id": db_order.order_id})

    return db_order


async def customer_orders_service(customer_id: int, request: Request) -> dict:
    """
    Оформленные заказы покупателя, сгруппированные по коду заказа,
    с кратким описанием товара и его главным изображением.
    """
    db = request.state.db
    log = request.app.state.log

    if await UserRepository(db).get(customer_id) is None:
        await log.log_error("order", "Покупатель не найден", {"customer_id": customer_id})
        raise HTTPException(status_code=404, detail="Invalid ID")

    orders = await OrderRepository(db).list_for_customer(customer_id)
    product_ids = list({o.product_id for o in orders})
    products = {p.id: p for p in await ProductRepository(db).list_by_ids(product_ids)}
    images = await ImageRepository(db).representative_map(product_ids)

    result = {}
    for o in orders:
        product = products.get(o.product_id)
        result[o.order_id] = {
            "id": o.id,
            "orderId": o.order_id,
            "orderDate": o.order_date,
            "status": o.order_status,
            "trackId": o.track_id,
            "expectedDeliveryDate": o.delivered_date,
            "product": {
                "name": product.product_name if product else "N/A",
                "brand": product.collection_name if product else "N/A",
                "image": images.get(o.product_id, ""),
                "price": (product.offer_price or 0) if product else 0,
                "quantity": o.qty or 1,
                "size": o.size or "",
            },
        }

    await log.log_info("order", "Заказы покупателя загружены", {"customer_id": customer_id, "count": len(result)})
    return result


async def cancel_order_service(id: int, cancel: OrderCancel, request: Request) -> OrderModel:
    """
    Отмена заказа покупателем. Склад при этом не пополняется,
    в отличие от отмены администратором.
    """
    db = request.state.db

    db_order = await _get_order_or_404(id, request)
    OrderRepository(db).apply(db_order, {
        "order_status": OrderStatus.CANCELLED.value,
        "cancellation_reason": cancel.reason or "",
    })
    await db.commit()

    await request.app.state.log.log_info("order", "Заказ отменён покупателем", {"id": id, "reason": cancel.reason})
    return db_order
