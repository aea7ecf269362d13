#!/usr/bin/env python3
"""
API Error Handlers Module

This module renders every failure as a JSON body of the form
{"error": message}, so no code path answers without a structured error.

@package XtreamGate
"""

# setup the imports
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from xtreamgate.api.routes import CORS_HEADERS
from xtreamgate.exceptions import GatewayError, InternalError, NotFoundError

# setup the logger
logger = logging.getLogger(__name__)

"""
Render a gateway error as JSON

@param exc: GatewayError The error to render
@return JSONResponse: Error body with the error's status code
"""
def error_response(exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

"""
Register the exception handlers on the application

@param app: FastAPI Application to register on
@return None
"""
def register_error_handlers(app: FastAPI):

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Render taxonomy errors raised by the services"""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes and unsupported methods both read as not found"""
        if exc.status_code in (404, 405):
            return error_response(NotFoundError())
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        """Anything else is an internal error"""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")

        # built outside the http middleware, so the CORS headers go on here
        response = error_response(InternalError())
        response.headers.update(CORS_HEADERS)
        return response
