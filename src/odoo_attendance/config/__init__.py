import os


def get_settings_module() -> str:
    # Chọn module cấu hình theo biến APP_ENV, mặc định là 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "odoo_attendance.config.production"

    if env in {"test", "testing"}:
        return "odoo_attendance.config.testing"

    return "odoo_attendance.config.development"
