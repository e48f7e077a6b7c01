# storefront/config.py
import os

# ButterCMS read token and API base. The token ships empty: set BUTTER_API_TOKEN
# in the environment (or .env loaded by your process manager) before starting.
BUTTER_API_TOKEN = os.getenv("BUTTER_API_TOKEN", "")
BUTTER_API_URL = os.getenv("BUTTER_API_URL", "https://api.buttercms.com/v2").rstrip("/")
PRODUCT_PAGE_TYPE = os.getenv("PRODUCT_PAGE_TYPE", "product")

# "memory" keeps carts in process memory, "sql" stores them via DATABASE_URL
CART_BACKEND = os.getenv("CART_BACKEND", "memory").strip().lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./storefront.db")

# 🔑 Session tokens
SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")
SESSION_ALGORITHM = os.getenv("SESSION_ALGORITHM", "HS256")
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "shop_session")
SESSION_MAX_AGE_DAYS = int(os.getenv("SESSION_MAX_AGE_DAYS", "30"))

# Callers without a session share this cart
DEFAULT_USER = os.getenv("DEFAULT_USER", "sample user")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
