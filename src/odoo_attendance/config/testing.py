SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ODOO_URL = "http://odoo.test"
ODOO_DB = "test"
RPC_TIMEOUT = 5.0

SESSION_ENCRYPTION_KEY = ""
SESSION_DIR = ""
SESSION_BACKEND = "memory"
