from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Gemini settings
    GEMINI_API_KEY: str
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TIMEOUT_SECONDS: float = 120.0

    # Collection transform settings
    ENRICHMENT_CONCURRENCY: int = 1

    # Upload settings
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_BYTES: int = 20 * 1024 * 1024
    ALLOWED_UPLOAD_MEDIA_TYPES: List[str] = [
        "application/json",
        "application/pdf",
        "text/plain",
        "text/csv",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "image/jpeg",
        "image/png",
        "image/webp",
    ]

    # MongoDB settings
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "workflow_gen"
    MONGODB_TIMEOUT_MS: int = 2000
    ERROR_COLLECTION_NAME: str = "error_logs"
    LLM_USAGE_COLLECTION_NAME: str = "llm_usage_logs"

    # LangFuse settings
    APP_VERSION: str = "1.0.0"
    LANGFUSE_TRACING_ENABLED: bool = False
    LANGFUSE_PUBLIC_KEY: str = ""
    LANGFUSE_SECRET_KEY: str = ""
    LANGFUSE_HOST: str = "http://localhost:3000"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    class Config:
        env_file = ".env"


settings = Settings()
