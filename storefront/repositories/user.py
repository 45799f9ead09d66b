# storefront/repositories/user.py

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.utils.database import id_in_range
from storefront.models.user import User


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, id: int) -> User | None:
        if not id_in_range(id):
            return None
        return await self.db.get(User, id)

    async def list_by_ids(self, ids: list[int]) -> list[User]:
        if not ids:
            return []
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return list(result.scalars().all())

    def add(self, user: User) -> User:
        self.db.add(user)
        return user
