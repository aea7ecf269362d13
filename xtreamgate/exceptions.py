#!/usr/bin/env python3
"""
Gateway Exceptions Module

This module defines the error taxonomy for XtreamGate. Every error carries
the HTTP status it maps to and the message returned to the client.

@package XtreamGate
"""

"""
Base class for all gateway errors

@param message: str Client-facing error message
"""
class GatewayError(Exception):

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(GatewayError):
    """Missing or invalid input fields"""
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(GatewayError):
    """Missing, unknown or expired session token"""
    status_code = 401
    default_message = "Invalid or expired session token"


class InvalidCredentialsError(UnauthorizedError):
    """Provider rejected the credentials or answered with something unusable"""
    default_message = "Invalid credentials or server response"


class NotFoundError(GatewayError):
    status_code = 404
    default_message = "Route not found"


class NoChannelsFoundError(NotFoundError):
    """Listing produced zero entries for the requested scope"""
    default_message = "No channels found"


class UpstreamError(GatewayError):
    """Transport failure talking to the provider"""
    status_code = 500
    default_message = "Failed to fetch stream"


class InternalError(GatewayError):
    status_code = 500
