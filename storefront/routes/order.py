# storefront/routes/order.py

from fastapi import APIRouter, HTTPException, Request, status
from typing import List
from storefront.schemas.base import MessageResponse
from storefront.schemas.order import (
    OrderDetail,
    OrderSummary,
    OrderCreate,
    OrderCreatedResponse,
    PaymentDetails,
    OrderAdminUpdate,
    OrderCancel,
)
from storefront.services.order import (
    place_order_service,
    confirm_payment_service,
    read_orders_service,
    read_order_service,
    admin_edit_order_service,
    customer_orders_service,
    cancel_order_service,
)

router = APIRouter()

# ────────────── CREATE ──────────────
@router.post(
    "/add",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Оформить заказ",
    response_description="Возвращает человекочитаемый ID заказа",
    responses={
        201: {"description": "Заказ успешно создан"},
        400: {"description": "Не заполнены обязательные поля"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def add_order(request: Request, order: OrderCreate):
    try:
        order_code = await place_order_service(order, request)
        return {"message": "Order placed successfully", "order_id": order_code}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при создании заказа: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── PAYMENT ──────────────
@router.post(
    "/gpay/payment/details",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Подтвердить оплату заказа (UPI или наложенный платёж)",
    responses={
        200: {"description": "Оплата зафиксирована, товар списан со склада"},
        400: {"description": "Неизвестный способ оплаты"},
        404: {"description": "Заказ не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def payment_details(request: Request, details: PaymentDetails):
    try:
        message = await confirm_payment_service(details, request)
        return {"message": message}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error(
            "order", f"Ошибка при подтверждении оплаты: {str(e)}", {"order_id": details.order_id}
        )
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── READ ALL ──────────────
@router.get(
    "/get/all/orders",
    response_model=List[OrderSummary],
    status_code=status.HTTP_200_OK,
    summary="Список оформленных заказов",
    responses={
        200: {"description": "Список заказов успешно получен"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_all_orders(request: Request):
    try:
        return await read_orders_service(request)
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении списка заказов: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── READ ONE ──────────────
@router.get(
    "/get/order/{id}",
    response_model=OrderDetail,
    status_code=status.HTTP_200_OK,
    summary="Получить заказ по ID",
    responses={
        200: {"description": "Заказ найден и возвращён"},
        404: {"description": "Заказ не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_order(id: int, request: Request):
    try:
        return await read_order_service(id, request)
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении заказа: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── UPDATE (admin) ──────────────
@router.put(
    "/edit/{id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Изменить заказ (администратор)",
    response_description="Статус заказа изменён, склад скорректирован",
    responses={
        200: {"description": "Заказ успешно обновлён"},
        400: {"description": "Недопустимые поля или значения"},
        404: {"description": "Заказ не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def edit_order(id: int, order_update: OrderAdminUpdate, request: Request):
    try:
        await admin_edit_order_service(id, order_update, request)
        return {"message": "Status Changed Successfully"}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при обновлении заказа: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── READ (customer) ──────────────
@router.get(
    "/user/get/{id}",
    status_code=status.HTTP_200_OK,
    summary="Заказы покупателя",
    responses={
        200: {"description": "Заказы покупателя, ключ: ID заказа"},
        404: {"description": "Покупатель не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def get_customer_orders(id: int, request: Request):
    try:
        orders = await customer_orders_service(id, request)
        return {"orders": orders}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении заказов покупателя: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── CANCEL (customer) ──────────────
@router.put(
    "/user/cancel/{id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Отменить заказ (покупатель)",
    responses={
        200: {"description": "Заказ отменён"},
        404: {"description": "Заказ не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def cancel_order(id: int, request: Request, cancel: OrderCancel | None = None):
    try:
        await cancel_order_service(id, cancel or OrderCancel(), request)
        return {"message": "Order Cancelled..."}
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при отмене заказа: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")
