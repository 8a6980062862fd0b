"""
Base Service Interface

Every engine service exposes the same async contract so the API layer can
treat them uniformly.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for engine services.

    A service takes one pydantic input contract, normalises it in
    ``validate_input`` and turns it into one output contract in ``execute``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name used in log lines and error messages."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the service on already validated input.

        Raises:
            ServiceError: If the input violates a service precondition
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    async def validate_input(self, input_data: InputT) -> InputT:
        """Return the input unchanged; pydantic already checked field types."""
        return input_data


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Input is well-typed but unusable (e.g. a snapshot without candles)."""
    pass
