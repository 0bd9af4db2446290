import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

PRESENT_HOURS_THRESHOLD = 7
HALF_DAY_HOURS_THRESHOLD = 4
DEFAULT_PF_PERCENTAGE = "12.00"
DEFAULT_TOTAL_WORKING_DAYS = 26

CURRENCY_SYMBOL = "₹"
HR_CONTACT_EMAIL = "hr@example.com"
