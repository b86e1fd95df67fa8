"""Application configuration."""
from typing import Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings."""

    # Database
    db_user: Optional[str] = None
    db_host: str = "localhost"
    db_name: Optional[str] = None
    db_password: Optional[str] = None
    db_port: int = 5432
    database_url: Optional[str] = None  # Overrides the DB_* parts when set
    db_pool_size: int = 10
    db_max_overflow: int = 5
    auto_migrate: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origin: str = "http://localhost:3000"
    static_dir: str = "frontend/build"

    # Application
    log_level: str = "INFO"
    app_name: str = "Tag Cloud"
    app_version: str = "1.0.0"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL handed to SQLAlchemy."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


settings = Settings()
