import os
from dotenv import load_dotenv

load_dotenv()

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8000))
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ledgerdesk.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Frontend / CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", FRONTEND_URL).split(",")
    if origin.strip()
]

# Access tokens are issued by the identity service and verified here
JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_TTL_MINUTES = int(os.getenv("ACCESS_TOKEN_TTL_MINUTES", 60))
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "auth-token")
LOGIN_URL = os.getenv("LOGIN_URL", "/sign-in")

# Recycle bin
DELETED_ITEMS_PAGE_SIZE = int(os.getenv("DELETED_ITEMS_PAGE_SIZE", 50))

# Organization defaults
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "GHS")
SUBSCRIPTION_GRACE_DAYS = int(os.getenv("SUBSCRIPTION_GRACE_DAYS", 7))
