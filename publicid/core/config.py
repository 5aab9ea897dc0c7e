from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

BACKENDS = ("database", "redis")
ALPHABET_TYPES = ("lower", "upper", "both")


class Settings(BaseSettings):
    PROJECT_NAME: str = "Public ID Generator"
    LOG_LEVEL: str = "INFO"

    # Full SQLAlchemy URL wins over the POSTGRES_* parts when set
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "publicid"

    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379

    PUBLIC_ID_NAMESPACE: str = "default"
    PUBLIC_ID_DEFAULT_LENGTH: int = 6
    PUBLIC_ID_DEFAULT_ALPHABET: str = "lower"
    PUBLIC_ID_MIN_DOMAIN_BITS: int = 16
    PUBLIC_ID_BACKEND: str = "database"
    PUBLIC_ID_COUNTER_KEY: str = "public_id_seq"

    class Config:
        env_file = ".env"

    @field_validator("PUBLIC_ID_BACKEND")
    def validate_backend(cls, v):
        if v not in BACKENDS:
            raise ValueError(f"PUBLIC_ID_BACKEND must be one of {BACKENDS}")
        return v

    @field_validator("PUBLIC_ID_DEFAULT_ALPHABET")
    def validate_default_alphabet(cls, v):
        if v not in ALPHABET_TYPES:
            raise ValueError(f"PUBLIC_ID_DEFAULT_ALPHABET must be one of {ALPHABET_TYPES}")
        return v

    @field_validator("PUBLIC_ID_DEFAULT_LENGTH")
    def validate_default_length(cls, v):
        if v < 1 or v > 12:
            raise ValueError("PUBLIC_ID_DEFAULT_LENGTH must be between 1 and 12")
        return v

    @field_validator("PUBLIC_ID_MIN_DOMAIN_BITS")
    def validate_min_domain_bits(cls, v):
        if v < 2 or v > 62:
            raise ValueError("PUBLIC_ID_MIN_DOMAIN_BITS must be between 2 and 62")
        return v

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()
