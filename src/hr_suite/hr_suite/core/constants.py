"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

DEFAULT_CURRENCY = "SGD"

JOB_TITLE_MIN_LENGTH = 3
JOB_DESCRIPTION_MIN_LENGTH = 50
CODE_SEQUENCE_WIDTH = 3

EMPLOYEE_NAME_MAX_LENGTH = 100
EMPLOYEE_MAX_SALARY = 999999
