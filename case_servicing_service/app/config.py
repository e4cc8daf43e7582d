# Application Configuration using Pydantic BaseSettings
from pydantic_settings import BaseSettings
from typing import Optional

# Environments in which request payloads may be logged
NON_PRODUCTION_ENVIRONMENTS = ("development", "staging")

class AppSettings(BaseSettings):
    # MongoDB
    MONGO_DETAILS: str = "mongodb://mongo:27017"
    DB_NAME: str = "case_servicing_db"

    # Environment: Development, Staging or Production
    ENVIRONMENT_NAME: str = "Development"

    # Observability
    LOG_LEVEL: str = "INFO"
    OTEL_EXPORTER_OTLP_TRACES_ENDPOINT: Optional[str] = None
    OTEL_EXPORTER_OTLP_METRICS_ENDPOINT: Optional[str] = None
    SERVICE_NAME_API: str = "case-servicing-api"

    # Reference numbers
    BUSINESS_SEGMENT: str = "CustomerServicing"
    REFERENCE_NUMBER_MAX_ATTEMPTS: int = 10

    # Startup
    SEED_TRANSACTION_TYPES: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def is_non_production(self) -> bool:
        return self.ENVIRONMENT_NAME.strip().lower() in NON_PRODUCTION_ENVIRONMENTS

# Instantiate settings to be imported by other modules
settings = AppSettings()

import logging
logger = logging.getLogger(__name__)
logger.info("Application settings module initialized.")
