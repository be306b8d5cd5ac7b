# backend/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

# ============================================================
# 🌍 DETECT ENVIRONMENT AND LOAD THE MATCHING .env
# ============================================================
ENV = os.getenv("ENV", "production" if "PASSENGER_ENV" in os.environ else "development")

env_file = ".env.production" if ENV == "production" else ".env.development"
dotenv_path = BASE_DIR / env_file
load_dotenv(dotenv_path)


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


# ============================================================
# ⚙️ GENERAL SETTINGS
# ============================================================
class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "NST BLR Superstars")
    VERSION: str = os.getenv("VERSION", "1.0")

    # 🔹 HTTP
    PORT: int = int(os.getenv("PORT", "3000"))

    # 🔹 Filesystem (user records + static assets)
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
    PUBLIC_DIR: Path = Path(os.getenv("PUBLIC_DIR", str(BASE_DIR / "public")))

    # 🔹 Rate limiting (100 requests / 15 minutes per client)
    RATE_LIMIT_MAX: int = int(os.getenv("RATE_LIMIT_MAX", "100"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))
    TRUST_PROXY: bool = _as_bool(os.getenv("TRUST_PROXY", "false"))

    # 🔹 Others
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    DEBUG: bool = ENV == "development"
    ENV: str = ENV

settings = Settings()
