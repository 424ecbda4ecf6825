import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dotenv import load_dotenv
# Load .env from the working directory
load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    SECRET_KEY: str = Field(default="storefront-insecure-dev-key")
    DEBUG: bool = Field(default=False)
    ALLOWED_HOSTS: list[str] = Field(default_factory=lambda: ["*"])

    # "sqlite" or "postgresql"
    DATABASE_ENGINE: str = Field(default="sqlite")
    DATABASE_NAME: str = Field(default="storefront.sqlite3")
    DATABASE_USER: str = Field(default="")
    DATABASE_PASSWORD: str = Field(default="")
    DATABASE_HOST: str = Field(default="")
    DATABASE_PORT: str = Field(default="")

    LOG_LEVEL: str = Field(default="INFO")

    def database_config(self) -> dict:
        if self.DATABASE_ENGINE == "postgresql":
            return {
                "ENGINE": "django.db.backends.postgresql",
                "NAME": self.DATABASE_NAME,
                "USER": self.DATABASE_USER,
                "PASSWORD": self.DATABASE_PASSWORD,
                "HOST": self.DATABASE_HOST,
                "PORT": self.DATABASE_PORT,
            }
        head, tail = os.path.split(self.DATABASE_NAME)
        return {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": self.DATABASE_NAME,
            # Writers queue at BEGIN instead of failing on the read-to-write lock upgrade.
            "OPTIONS": {"transaction_mode": "IMMEDIATE", "timeout": 20},
            # File-backed so test threads share one database.
            "TEST": {"NAME": os.path.join(head, f"test_{tail}")},
        }


# Create global settings instance
settings = Settings()
