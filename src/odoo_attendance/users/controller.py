from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..session.store import has_session
from .model import Employee


def employee_to_json(employee: Employee) -> dict:
    return {
        "id": employee.employee_id,
        "name": employee.name,
        "department": employee.department_name,
        "job": employee.job_name,
        "is_user_only": employee.is_user_only,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        user = container.auth_service.login(
            data.get("url") or app.config.get("ODOO_URL", ""),
            data.get("db") or app.config.get("ODOO_DB", ""),
            data.get("email", ""),
            data.get("password", ""),
        )
        return jsonify({
            "success": True,
            "message": "Logged in",
            "uid": user.uid,
            "employee": employee_to_json(user.employee),
        }), 200

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.auth_service.logout()
        return jsonify({"success": True, "message": "Logged out"}), 200

    @app.route("/api/session/restore", methods=["POST"], endpoint="restore_session")
    def restore_session():
        session = container.auth_service.restore_session()
        current = container.auth_service.current
        if not session or not current:
            return jsonify({"success": False, "message": "No session"}), 200

        return jsonify({
            "success": True,
            "message": "Session restored",
            "uid": current.uid,
            "employee": employee_to_json(current.employee),
        }), 200

    @app.route("/api/session", methods=["GET"], endpoint="session_state")
    def session_state():
        current = container.auth_service.current
        return jsonify({
            "success": True,
            "state": container.auth_service.state.value,
            "has_stored_session": has_session(container.session_store),
            "uid": current.uid if current else None,
            "employee": employee_to_json(current.employee) if current else None,
        }), 200
