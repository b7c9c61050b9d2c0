# cardledger/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- Database Config ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "cardledger"
    DB_USER: str = "postgres"
    DB_PASS: str = "postgres"
    DB_POOL_MIN_SIZE: int = 5
    DB_POOL_MAX_SIZE: int = 20

    # --- Transfer Rules ---
    TRANSFER_FEE: int = 500
    MIN_TRANSFER_AMOUNT: int = 1000
    MAX_TRANSFER_AMOUNT: int = 10_000_000
    CARD_NUMBER_LENGTH: int = 16

    # --- Leaderboard ---
    TOP_USERS_LIMIT: int = 3
    TOP_USERS_TRANSACTIONS: int = 10
    TOP_USERS_WINDOW_MINUTES: int = 10

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def asyncpg_url(self) -> str:
        return (
            f"postgresql://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
