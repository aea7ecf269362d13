#!/usr/bin/env python3
"""
API Routes Package Initialization

This package contains all API route definitions for the XtreamGate application.
It exports the router and the error handler registration for the FastAPI application.

@package XtreamGate
"""
from .routes import router, CORS_HEADERS
from .errors import register_error_handlers

# hold the necessary modules
__all__ = ["router", "CORS_HEADERS", "register_error_handlers"]
