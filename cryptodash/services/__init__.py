"""
CryptoDash Services

Service layer containing the indicator engine and display helpers.
"""

from cryptodash.services.base import BaseService, ServiceError, ValidationError

__all__ = ["BaseService", "ServiceError", "ValidationError"]
