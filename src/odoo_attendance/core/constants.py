"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

RPC_ENDPOINT = "/jsonrpc"
RPC_PROTOCOL_VERSION = "2.0"
DEFAULT_TIMEOUT_SECONDS = 30
MAX_REQUEST_ID = 1_000_000

SESSION_KEY = "odoo_session"

DEFAULT_HISTORY_LIMIT = 50

# Remote models
MODEL_ATTENDANCE = "hr.attendance"
MODEL_EMPLOYEE = "hr.employee"
MODEL_USERS = "res.users"

# Server datetime convention: naive, second precision
SERVER_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
SERVER_DATE_FORMAT = "%Y-%m-%d"
