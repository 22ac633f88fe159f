SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = None

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

DEFAULT_CURRENCY = "SGD"

SEED_DEMO_DATA = False
