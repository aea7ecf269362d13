#!/usr/bin/env python3
"""
Models Package Initialization

This package contains all data model definitions for the XtreamGate application.
It exports configuration, credential, session and channel models.

@package XtreamGate
"""
from .stream import ChannelEntry, ProviderCredentials, Session, AppConfig
from .stream import STREAM_TYPES, CONTENT_SCOPES

# hold the necessary modules
__all__ = [
    "ChannelEntry",
    "ProviderCredentials",
    "Session",
    "AppConfig",
    "STREAM_TYPES",
    "CONTENT_SCOPES",
]
