"""
Global toolkit for python services.

This library provides common functionality for:
- Outbound HTTP(S) requests
- RPC header propagation through context handles
- Logging and configuration
"""

__version__ = "1.0.0"
__author__ = "Global Toolkit Team"
