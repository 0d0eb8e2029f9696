from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./jobboard.db"
    STORE_TIMEOUT_SECONDS: float = 5.0

    # Password hashing (bcrypt cost factor)
    BCRYPT_ROUNDS: int = 10

    # Password reset tokens
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    PASSWORD_RESET_EXPIRE_MINUTES: int = 30
    PASSWORD_RESET_URL: str = "https://ihospitaljobs.com/reset-password"

    # Job catalog
    ENFORCE_JOB_OWNERSHIP: bool = False
    RECENT_JOBS_LIMIT: int = 10

    # Application
    APP_NAME: str = "iHospitalJobs"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "https://ihospitaljobs.com,"
        "https://localhost:3001"
    )

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """Refuse cost factors below 10 rounds."""
        if v < 10:
            raise ValueError("BCRYPT_ROUNDS must be at least 10")
        return v

    @property
    def cors_origins(self) -> list[str]:
        return [
            origin.strip()
            for origin in self.BACKEND_CORS_ORIGINS.split(",")
            if origin.strip()
        ]


settings = Settings()
