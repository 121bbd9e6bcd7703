"""
API routes module.

FastAPI application factory and HTTP routers.
"""
