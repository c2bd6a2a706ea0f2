import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Default server shown on the login form; the user may override it per login
ODOO_URL = os.getenv("ODOO_URL", "http://localhost:8069")
ODOO_DB = os.getenv("ODOO_DB", "odoo")
RPC_TIMEOUT = float(os.getenv("RPC_TIMEOUT", "30"))

SESSION_ENCRYPTION_KEY = os.getenv("SESSION_ENCRYPTION_KEY", "")
SESSION_DIR = os.getenv("SESSION_DIR", os.path.join(os.path.expanduser("~"), ".odoo_attendance"))
SESSION_BACKEND = os.getenv("SESSION_BACKEND", "file" if SESSION_ENCRYPTION_KEY else "memory")
