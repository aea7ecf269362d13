#!/usr/bin/env python3
"""
Core Package Initialization

This package contains the core components for the XtreamGate application.
It exports the main XtreamGateway class for application use.

@package XtreamGate
"""
from .gateway import XtreamGateway

__all__ = ["XtreamGateway"]
