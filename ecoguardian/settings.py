import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# load .env once at startup
load_dotenv()


class Settings(BaseModel):
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    ai_timeout_seconds: float = Field(default=20.0, gt=0, alias="AI_TIMEOUT_SECONDS")
    storage_backend: str = Field(default="memory", pattern="^(memory|database)$", alias="STORAGE_BACKEND")
    database_url: str = Field(default="sqlite:///./ecoguardian.db", alias="DATABASE_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    @classmethod
    def from_env(cls):
        data = {
            "GEMINI_API_KEY": os.getenv("GEMINI_API_KEY") or None,
            "GEMINI_MODEL": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            "AI_TIMEOUT_SECONDS": os.getenv("AI_TIMEOUT_SECONDS", "20"),
            "STORAGE_BACKEND": os.getenv("STORAGE_BACKEND", "memory").lower(),
            "DATABASE_URL": os.getenv("DATABASE_URL", "sqlite:///./ecoguardian.db"),
            "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
            "CORS_ORIGINS": [
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        }
        return cls.model_validate(data)


settings = Settings.from_env()
