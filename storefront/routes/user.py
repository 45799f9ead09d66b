# storefront/routes/user.py

from fastapi import APIRouter, HTTPException, Request, status
from typing import List
from storefront.schemas.user import UserCreate, UserResponse, Address
from storefront.services.user import create_user_service, read_user_service, read_addresses_service

router = APIRouter()

# ────────────── CREATE ──────────────
@router.post(
    "/add",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать покупателя",
    responses={
        201: {"description": "Покупатель создан"},
        400: {"description": "Email уже занят"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def add_user(request: Request, user: UserCreate):
    try:
        return await create_user_service(user, request)
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("user", f"Ошибка при создании покупателя: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── READ ONE ──────────────
@router.get(
    "/get/{id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Получить покупателя по ID",
    responses={
        200: {"description": "Покупатель найден"},
        404: {"description": "Покупатель не найден"},
    },
)
async def get_user(id: int, request: Request):
    try:
        return await read_user_service(id, request)
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("user", f"Ошибка при получении покупателя: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ────────────── ADDRESSES ──────────────
@router.get(
    "/address/{id}",
    response_model=List[Address],
    status_code=status.HTTP_200_OK,
    summary="Сохранённые адреса покупателя",
    responses={
        200: {"description": "Список адресов"},
        404: {"description": "Покупатель не найден"},
    },
)
async def get_addresses(id: int, request: Request):
    try:
        return await read_addresses_service(id, request)
    except HTTPException:
        raise
    except Exception as e:
        await request.app.state.log.log_error("user", f"Ошибка при получении адресов: {str(e)}", {"id": id})
        raise HTTPException(status_code=500, detail="Internal Server Error")
