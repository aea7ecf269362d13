#!/usr/bin/env python3
"""
Sources Package Initialization

This package contains the upstream provider integration for XtreamGate.
It exports the raw HTTP client and the Xtream Codes API source.

@package XtreamGate
"""

# setup the necessary imports
from .base import UpstreamClient, UpstreamResponse
from .xtream import XtreamSource

# now hold the modules
__all__ = ["UpstreamClient", "UpstreamResponse", "XtreamSource"]
