"""Result values and the error taxonomy for domain access functions.

Domain access functions never raise past their own boundary. Each one is
wrapped with :func:`guarded`, which runs the body, commits nothing on its own,
and converts any failure into a populated ``Result.error``:

- ``TRANSPORT``: the store could not be reached or the connection broke
- ``CONSTRAINT``: integrity/check violations and ownership policy denials
- ``NOT_FOUND``: no visible row; callers may treat it as an empty result
- ``UNKNOWN``: anything else
"""

import enum
import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

import structlog
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ROW_LEVEL_SECURITY = "row_level_security"


class ErrorKind(str, enum.Enum):
    TRANSPORT = "transport"
    CONSTRAINT = "constraint"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class AccessError(Exception):
    """Failure reported by a domain access function.

    ``code`` narrows the kind where callers care, e.g. ``row_level_security``
    for writes rejected by an ownership policy.
    """

    def __init__(self, kind: ErrorKind, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code

    @classmethod
    def not_found(cls, message: str) -> "AccessError":
        return cls(ErrorKind.NOT_FOUND, message, code="not_found")

    @classmethod
    def constraint(cls, message: str, *, code: Optional[str] = None) -> "AccessError":
        return cls(ErrorKind.CONSTRAINT, message, code=code)

    @classmethod
    def policy(cls, message: str = "new row violates row-level security policy") -> "AccessError":
        return cls(ErrorKind.CONSTRAINT, message, code=ROW_LEVEL_SECURITY)

    def __repr__(self) -> str:
        return f"AccessError(kind={self.kind.value!r}, message={self.message!r}, code={self.code!r})"


@dataclass
class Result(Generic[T]):
    data: Optional[T] = None
    error: Optional[AccessError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_not_found(self) -> bool:
        return self.error is not None and self.error.kind is ErrorKind.NOT_FOUND


def classify(exc: BaseException) -> AccessError:
    """Map an exception raised by the persistence layer onto the taxonomy"""
    if isinstance(exc, AccessError):
        return exc
    if isinstance(exc, IntegrityError):
        detail = str(exc.orig) if exc.orig is not None else str(exc)
        return AccessError.constraint(detail, code="integrity")
    if isinstance(exc, NoResultFound):
        return AccessError.not_found("No rows returned")
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)):
        return AccessError(ErrorKind.TRANSPORT, "Data store unavailable", code="transport")
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return AccessError(ErrorKind.TRANSPORT, "Connection lost", code="transport")
    if isinstance(exc, SQLAlchemyError):
        return AccessError(ErrorKind.UNKNOWN, "Database error", code="database")
    return AccessError(ErrorKind.UNKNOWN, "Unexpected error")


def guarded(operation: str) -> Callable[[Callable[..., T]], Callable[..., Result[T]]]:
    """Wrap a domain access function so it returns ``Result`` instead of raising.

    The wrapped function receives a ``RequestContext`` as first argument. On
    failure the context's session is rolled back before the error is returned.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., Result[T]]:
        @functools.wraps(func)
        def wrapper(ctx, *args: Any, **kwargs: Any) -> Result[T]:
            try:
                return Result(data=func(ctx, *args, **kwargs))
            except Exception as exc:
                ctx.db.rollback()
                error = classify(exc)
                if error.kind is ErrorKind.UNKNOWN:
                    logger.exception("access_failed", operation=operation, kind=error.kind.value)
                else:
                    logger.warning(
                        "access_failed",
                        operation=operation,
                        kind=error.kind.value,
                        code=error.code,
                        detail=error.message,
                    )
                return Result(error=error)

        return wrapper

    return decorator
