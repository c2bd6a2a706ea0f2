import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ODOO_URL = os.getenv("ODOO_URL", "")
ODOO_DB = os.getenv("ODOO_DB", "")
RPC_TIMEOUT = float(os.getenv("RPC_TIMEOUT", "30"))

# The session holds the user's password: production always encrypts it at rest
SESSION_ENCRYPTION_KEY = os.getenv("SESSION_ENCRYPTION_KEY", "")
SESSION_DIR = os.getenv("SESSION_DIR", os.path.join(os.path.expanduser("~"), ".odoo_attendance"))
SESSION_BACKEND = "file"
