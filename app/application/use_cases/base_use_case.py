"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar, Generic, List
from datetime import datetime

from app.domain.models.base import DomainException, AuthenticationError, AuthorizationError
from app.domain.models.user import Principal

logger = logging.getLogger(__name__)


T = TypeVar('T')
R = TypeVar('R')


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.

    Times and logs every execution. Domain exceptions are logged and re-raised
    unchanged so the web layer can translate them into error responses.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    @property
    def name(self) -> str:
        return self.__class__.__name__

    async def execute(self, request: T, principal: Optional[Principal] = None) -> R:
        """
        Execute the use case with proper error handling and logging.
        """
        self.execution_start = datetime.utcnow()

        try:
            # Validate input
            await self._validate_request(request, principal)

            # Execute business logic
            return await self._execute_business_logic(request, principal)

        except DomainException as exc:
            logger.info(f"{self.name} refused: {exc.code}: {exc.message}")
            raise

        except Exception:
            logger.exception(f"{self.name} failed unexpectedly")
            raise

        finally:
            self.execution_end = datetime.utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()
            logger.debug(f"{self.name} finished in {execution_time:.4f}s")

    async def _validate_request(self, request: T, principal: Optional[Principal]) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        pass

    @abstractmethod
    async def _execute_business_logic(self, request: T, principal: Optional[Principal]) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    Collects domain events raised by the command and publishes them once it succeeds.
    """

    def __init__(self):
        super().__init__()
        self.events: List[Any] = []

    async def _execute_business_logic(self, request: T, principal: Optional[Principal]) -> R:
        try:
            result = await self._execute_command_logic(request, principal)

            # Publish domain events
            await self._publish_events()

            return result

        except Exception:
            self.events.clear()
            raise

    @abstractmethod
    async def _execute_command_logic(self, request: T, principal: Optional[Principal]) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass

    def _collect_events(self, entity: Any) -> None:
        self.events.extend(entity.pull_events())

    async def _publish_events(self) -> None:
        """Publish collected domain events to the log."""
        for event in self.events:
            logger.info(f"Domain event {event.event_name}: {event.to_dict()['data']}")

        self.events.clear()


# Authorization mixin
class AuthorizedUseCase(BaseUseCase[T, R]):
    """
    Mixin for use cases that require an authenticated principal.
    Set ``required_role`` to restrict the use case to one role.
    """

    required_role: Optional[str] = None

    async def _validate_request(self, request: T, principal: Optional[Principal]) -> None:
        """Validate request with authorization check."""
        await super()._validate_request(request, principal)

        if principal is None:
            raise AuthenticationError()

        if self.required_role is not None:
            self._require_role(principal, self.required_role)

    def _require_role(self, principal: Principal, required_role: str) -> None:
        """Check if the principal holds the required role."""
        if principal.role != required_role:
            raise AuthorizationError(f"Role '{required_role}' required")
