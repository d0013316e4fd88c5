from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field("sqlite+aiosqlite:///./school.db", alias="DATABASE_URL")
    sql_echo: bool = Field(False, alias="SQL_ECHO")

    app_title: str = Field("School Management API", alias="APP_TITLE")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Local/demo conveniences; production deployments manage schema separately.
    create_tables_on_startup: bool = Field(True, alias="CREATE_TABLES_ON_STARTUP")
    load_sample_data: bool = Field(False, alias="LOAD_SAMPLE_DATA")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
