import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None

DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))

DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "SGD")

SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "0")))
