"""
Tagged result type threaded through the chat pipeline.

Every pipeline stage returns either ``Ok(value)`` or ``Failed(kind, ...)``.
The gateway stops at the first ``Failed`` and hands it to the error mapper.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from .errors import FailureKind

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful stage outcome."""
    value: T


@dataclass(frozen=True)
class Failed:
    """Failed stage outcome."""
    kind: FailureKind
    detail: str = ""
    status_code: Optional[int] = None
    code: Optional[str] = None


Result = Union[Ok[Any], Failed]
