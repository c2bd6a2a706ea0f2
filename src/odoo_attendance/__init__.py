"""Odoo attendance client package.

This package is organized by feature modules (rpc, session, users, attendance)
with a thin Flask controller layer on top of service/repository layers.
"""
