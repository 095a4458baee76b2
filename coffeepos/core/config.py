"""POS Terminal Configuration"""

import os
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "CoffeePOS Terminal"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # Backend Configuration
    backend_base_url: str = "http://localhost:5000"
    request_timeout: float = 30.0

    # Session persistence
    token_file: str = os.path.join(os.path.expanduser("~"), ".coffeepos", "token")

    # Order entry
    low_stock_threshold: int = 10
    default_payment_method: str = "cash"
    currency_symbol: str = "₱"

    # Screens
    dashboard_refresh_seconds: float = 120.0
    notice_ttl_seconds: float = 5.0
    sales_page_size: int = 20

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "POS_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
