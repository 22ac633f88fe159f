import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None

DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))

DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "SGD")

# Load sample tenants/postings/employees on startup
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))
