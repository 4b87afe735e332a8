from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///./receiptdesk.db"
    DB_ECHO: bool = False

    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
