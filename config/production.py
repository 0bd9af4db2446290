import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

PRESENT_HOURS_THRESHOLD = float(os.getenv("PRESENT_HOURS_THRESHOLD", "7"))
HALF_DAY_HOURS_THRESHOLD = float(os.getenv("HALF_DAY_HOURS_THRESHOLD", "4"))
DEFAULT_PF_PERCENTAGE = os.getenv("DEFAULT_PF_PERCENTAGE", "12.00")
DEFAULT_TOTAL_WORKING_DAYS = int(os.getenv("DEFAULT_TOTAL_WORKING_DAYS", "26"))

CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")
HR_CONTACT_EMAIL = os.getenv("HR_CONTACT_EMAIL", "hr@example.com")
