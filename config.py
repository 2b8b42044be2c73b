# config.py
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ALLOWED_ORIGINS = "http://localhost:5173,https://chatbot-adwance.netlify.app"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    """Runtime settings read from the environment (and .env if present)"""

    def __init__(self):
        self.JWT_SECRET = os.getenv("JWT_SECRET")

        # Store
        self.STORE_BACKEND = os.getenv("STORE_BACKEND", "supabase").lower()
        self.SUPABASE_URL = os.getenv("SUPABASE_URL")
        self.SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
        self.DB_CONNECT_TIMEOUT = float(os.getenv("DB_CONNECT_TIMEOUT", "5"))

        # Server
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = int(os.getenv("PORT", "5000"))
        self.ALLOWED_ORIGINS = _split_origins(os.getenv("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS))
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
