"""
Domain layer for the Gateway Service.

Holds the wire models, the passkey checker, the per-route request
translators, and the front door that wraps every client-facing route.
"""

from .credentials import CredentialChecker
from .front_door import FrontDoor, FrontDoorMiddleware
from .translators import AuthTranslator, CatalogTranslator, OrderTranslator

__all__ = [
    "CredentialChecker",
    "FrontDoor",
    "FrontDoorMiddleware",
    "AuthTranslator",
    "CatalogTranslator",
    "OrderTranslator",
]
