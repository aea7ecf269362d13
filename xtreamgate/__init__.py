#!/usr/bin/env python3
"""
XtreamGate Application Package Initialization

This package contains the XtreamGate tokenizing gateway components.
It exports the version identifier for the application.

@package XtreamGate
"""

# hold the version of the application
__version__ = "1.0.0"
