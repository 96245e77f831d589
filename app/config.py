import string

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str

    # JWT Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    BCRYPT_ROUNDS: int = 12

    # Application
    PROJECT_NAME: str = "Clubhouse API"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Invite codes
    INVITE_CODE_LENGTH: int = 8
    INVITE_CODE_ALPHABET: str = string.ascii_uppercase + string.digits
    INVITE_CODE_MAX_ATTEMPTS: int = 20
    # Full allocate-and-insert cycles before club creation gives up
    CLUB_CREATE_MAX_ATTEMPTS: int = 3

    # Clubs
    MAX_CLUB_STATS: int = 4

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create a global settings instance
settings = Settings()
