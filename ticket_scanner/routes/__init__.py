"""
FastAPI routers for all pages.

Every router except health is mounted under BASE_PATH and, apart from the
login pages, depends on require_login.
"""
