import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = os.getenv("APP_NAME", "Inframe Canvas Agent")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", False)

    # Server settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = os.getenv("PORT", 8000)

    # CORS settings
    # Comma separated, see cors_origins
    allowed_origins: str = os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:3000, http://127.0.0.1:3000"
    )

    # AI/LLM settings
    gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY", None)
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    llm_temperature: float = os.getenv("LLM_TEMPERATURE", 0.2)
    llm_max_output_tokens: int = os.getenv("LLM_MAX_OUTPUT_TOKENS", 2048)
    # Per-request upstream timeout, no retries on top of it
    llm_timeout_seconds: float = os.getenv("LLM_TIMEOUT_SECONDS", 30)

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance, built once at import and passed explicitly to services
settings = Settings()
