import os
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    # Main database (PostgreSQL)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "crud_bank"
    db_user: str = "postgres"
    db_password: str = "postgres"

    # Full URL, overrides the fields above (e.g. sqlite:// in tests)
    db_url: str | None = None

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    init_database: bool = True
    seed_database: bool = False

    api_prefix: str = ""
    supported_api_versions: list[int] = [1, 2]
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    jwt_secret: str = os.getenv(
        "JWT_SECRET", "your-super-secret-key-that-is-at-least-32-characters-long!"
    )
    jwt_issuer: str = os.getenv("JWT_ISSUER", "crud-bank-api")
    jwt_audience: str = os.getenv("JWT_AUDIENCE", "crud-bank-api-users")
    jwt_expiration_minutes: int = int(os.getenv("JWT_EXPIRATION_MINUTES", "60"))

    password_hash_iterations: int = 600_000

    # Applied to users created through the admin endpoint without a password
    default_user_password: str = "defaultpassword123"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("api_prefix", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        host = self.db_host
        port = self.db_port
        db = self.db_name

        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"


settings = Settings()
