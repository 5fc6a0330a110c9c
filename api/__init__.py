"""
api: FastAPI routers, dependencies, middleware and error handlers.
"""
