# storefront/utils/database.py

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from storefront.config import settings

# ────────────── Base для моделей ──────────────
Base = declarative_base()  # базовый класс для всех моделей SQLAlchemy

# Наибольшее значение INTEGER в SQLite/Postgres BIGINT
MAX_ID = 2**63 - 1


def id_in_range(id: int) -> bool:
    """Можно ли передать число в запрос как INTEGER без переполнения."""
    return -MAX_ID - 1 <= id <= MAX_ID

# ────────────── URL базы данных ──────────────
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# ────────────── Асинхронный движок ──────────────
engine = create_async_engine(
    SQLALCHEMY_DATABASE_URL,
    echo=settings.LOG_PRINT_DB.lower() in ("1", "true", "yes")  # вывод SQL для отладки
)

# ────────────── Асинхронная сессия ──────────────
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False  # объекты остаются читаемыми после commit (ответы строятся после записи)
)


def import_models():
    """Регистрирует все модели в Base.metadata."""
    from storefront.models import order, product, user, sequence  # noqa: F401


# ────────────── Инициализация базы данных ──────────────
async def init_db():
    """
    Создаёт все таблицы в базе данных (если ещё не созданы).
    """
    import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    """Удаляет все таблицы. Используется в тестах."""
    import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
