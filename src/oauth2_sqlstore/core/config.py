"""
Configuration module for the OAuth2 SQL store
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Store settings with environment variable support"""
    
    # Application
    APP_NAME: str = "OAuth2 SQL Store"
    APP_VERSION: str = "1.0.0"
    
    # Database
    DATABASE_URL: str = "sqlite:///./oauth2.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    
    # Tables
    TOKEN_TABLE: str = "oauth2_token"
    CLIENT_TABLE: str = "oauth2_client"
    
    # Garbage collection interval in seconds (<= 0 falls back to 600)
    GC_INTERVAL: int = 600
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
