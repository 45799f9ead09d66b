# storefront/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./storefront.db"   # URL базы (async драйвер)

    ID_PREFIX: str = "RAYA"         # префикс человекочитаемых ID: RAYA/2025/ORD/0001
    RANDOM_SAMPLE_SIZE: int = 6     # сколько товаров отдаёт /product/get/random/product

    NOTIFY_ENABLED: bool = True

    HOST: str = "127.0.0.1"
    PORT: int = 8000

    LOG_DIR: str = "log"
    LOG_PRINT: str = "1"
    LOG_PRINT_DB: str = "0"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
