import os
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """
    Central source for all environment variables.
    """
    # Database
    MONGODB_URI = os.getenv("MONGODB_URI")
    DB_NAME = os.getenv("DB_NAME", "fittrack")

    # JWT
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "your-super-secret-jwt-key-change-in-production")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "168"))

    # AI provider
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")
    GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")

    # Third-party data APIs
    EXERCISEDB_BASE_URL = os.getenv("EXERCISEDB_BASE_URL", "https://exercisedb.p.rapidapi.com")
    RAPIDAPI_KEY = os.getenv("RAPIDAPI_KEY", "")
    EDAMAM_APP_ID = os.getenv("EDAMAM_APP_ID", "")
    EDAMAM_APP_KEY = os.getenv("EDAMAM_APP_KEY", "")

    # Cache
    REDIS_URL = os.getenv("REDIS_URL")
    EXERCISE_CACHE_SECONDS = int(os.getenv("EXERCISE_CACHE_SECONDS", "1800"))

    # HTTP
    CORS_ORIGINS = _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
