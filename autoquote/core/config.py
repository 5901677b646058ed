from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    QUOTES_FILE: str = "./data/quotes.json"

    REDIS_URL: Optional[str] = None

    IDEMPOTENCY_TTL: int = 300  # 5 minutes
    PRICE_CACHE_TTL: int = 60   # 60 seconds

    CORS_ORIGINS: List[str] = ["*"]

    # Starting values for a new editing session
    DEFAULT_COST: float = 26906.0
    DEFAULT_PROFIT: float = 1500.0
    DEFAULT_SELLING_PRICE: float = 28406.0
    DEFAULT_TERM: float = 36.0
    DEFAULT_RATE: float = 5.7
    DEFAULT_OUT_OF_POCKET: float = 2000.0
    DEFAULT_TAX_RATE: float = 7.5

    API_TITLE: str = "Vehicle Financing Quote Service"
    API_DESCRIPTION: str = "Loan, tax and payment quotes for vehicle sales, with saved quotes"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
