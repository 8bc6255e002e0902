
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = Field("invoice-insights-dashboard", alias="APP_NAME")
    app_env: str = Field("dev", alias="APP_ENV")

    # Extraction backend (owns documents, search and storage)
    backend_base_url: str = Field("http://localhost:5002/api", alias="BACKEND_BASE_URL")
    backend_timeout_seconds: float = Field(10.0, alias="BACKEND_TIMEOUT_SECONDS")

    # CORS allowed origins (comma-separated list for the dashboard frontend)
    cors_origins: str = Field("http://localhost:5173,http://127.0.0.1:5173", alias="CORS_ORIGINS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Dashboard
    summary_top_n: int = Field(5, alias="SUMMARY_TOP_N")
    recent_documents_limit: int = Field(5, alias="RECENT_DOCUMENTS_LIMIT")
    default_currency: str = Field("USD", alias="DEFAULT_CURRENCY")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

settings = Settings()
