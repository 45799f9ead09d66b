# storefront/utils/sequence.py
# Генерация человекочитаемых ID вида RAYA/2025/ORD/0001

from datetime import datetime
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.models.sequence import Sequence

ORDER = "ORD"
PRODUCT = "PRD"


def format_code(entity: str, year: int, value: int, prefix: str | None = None) -> str:
    return f"{prefix or settings.ID_PREFIX}/{year}/{entity}/{value:04d}"


async def _increment(db: AsyncSession, entity: str, year: int) -> int | None:
    result = await db.execute(
        update(Sequence)
        .where(Sequence.entity == entity, Sequence.year == year)
        .values(value=Sequence.value + 1)
        .returning(Sequence.value)
        .execution_options(synchronize_session=False)
    )
    return result.scalar_one_or_none()


async def next_code(db: AsyncSession, entity: str, now: datetime | None = None) -> str:
    """
    Выдаёт следующий ID для типа entity в текущем году.

    Счётчик увеличивается одним UPDATE ... RETURNING, поэтому два параллельных
    запроса не получат одинаковый номер. Вызывать до остальных записей в сессии:
    при гонке на создании строки счётчика сессия откатывается.
    """
    year = (now or datetime.now()).year

    value = await _increment(db, entity, year)
    if value is None:
        db.add(Sequence(entity=entity, year=year, value=1))
        try:
            await db.flush()
            value = 1
        except IntegrityError:
            # строку счётчика успел создать другой запрос
            await db.rollback()
            value = await _increment(db, entity, year)

    return format_code(entity, year, value)
