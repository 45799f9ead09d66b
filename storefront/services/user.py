# storefront/services/user.py

from fastapi import HTTPException, Request
from sqlalchemy.exc import IntegrityError

from storefront.models.user import User as UserModel
from storefront.repositories.order import AddressRepository
from storefront.repositories.user import UserRepository
from storefront.schemas.user import UserCreate


async def create_user_service(user: UserCreate, request: Request) -> UserModel:
    """
    Создание покупателя.
    """
    db = request.state.db
    log = request.app.state.log

    db_user = UserRepository(db).add(UserModel(**user.model_dump()))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        await log.log_warning("user", "Email уже занят", {"email": user.email})
        raise HTTPException(status_code=400, detail="User with this email already exists")

    await log.log_info("user", "Покупатель создан", {"id": db_user.id})
    return db_user


async def read_user_service(id: int, request: Request) -> UserModel:
    """
    Чтение покупателя по ID.
    """
    db_user = await UserRepository(request.state.db).get(id)
    if db_user is None:
        await request.app.state.log.log_error("user", "Покупатель не найден", {"id": id})
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


async def read_addresses_service(id: int, request: Request) -> list:
    """Сохранённые адреса покупателя."""
    await read_user_service(id, request)
    return await AddressRepository(request.state.db).saved_for_user(id)
