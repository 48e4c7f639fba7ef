"""
Baserow Module - the hosted row store used as system of record.
"""

from app.environments.baserow.client import BaserowClient, Row

__all__ = ["BaserowClient", "Row"]
