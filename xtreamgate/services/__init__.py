#!/usr/bin/env python3
"""
Services Package Initialization

This package contains all service layer components for the XtreamGate application.
It exports session storage, playlist generation, and stream resolution services.

@package XtreamGate
"""
from .session_store import SessionStore
from .playlist import PlaylistGenerator
from .stream_service import StreamResolver

# hold the necessary modules
__all__ = [
    "SessionStore",
    "PlaylistGenerator",
    "StreamResolver",
]
