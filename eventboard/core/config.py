"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./eventboard.db")
    
    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")
    
    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    
    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]
    
    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30
    
    # Categories are spaced so one can be slotted in without renumbering
    CATEGORY_SORT_STEP: int = 10
    
    # Backoffice dashboard
    DASHBOARD_LIST_LIMIT: int = 10
    
    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
