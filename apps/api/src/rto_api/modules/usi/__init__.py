"""
USI Module

Local pre-check of Unique Student Identifiers (Luhn mod 32 checksum) before
any call to the USI Registry.

API Endpoints:
- POST /usi/verify - Pre-check a single USI
- POST /usi/verify-batch - Pre-check a list of USIs
"""

from .router import router

__all__ = ["router"]
