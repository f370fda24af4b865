from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # API Settings
    PROJECT_NAME: str = "House Ledger API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Shared expense splitting and settlement for households"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "houseledger"
    # Multi-document transactions need a replica set (e.g. `mongod --replSet rs0`).
    # Against a standalone server every expense and house write fails with
    # 503 unless this is set to false.
    USE_TRANSACTIONS: bool = True

    # JWT (tokens are issued by the auth provider, we only verify them)
    JWT_SECRET: str = "change-this-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Ledger
    INVITE_CODE_LENGTH: int = 6
    PAYER_CONTRIBUTION_NOTE: str = "Owner of expense: already paid"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

settings = Settings()
