from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel, Field
from datetime import datetime, timezone

T = TypeVar("T")

class ErrorInfo(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[ErrorInfo] = None
    metadata: Dict[str, Any] = {}
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, metadata=metadata or {})

    @classmethod
    def fail(
        cls,
        message: str,
        code: str = "ERROR",
        details: Optional[Dict[str, Any]] = None,
        data: Optional[T] = None,
    ) -> "ApiResponse[T]":
        """Failure envelope; `data` may still carry a degraded (e.g. zero-valued) payload."""
        return cls(
            success=False,
            data=data,
            error=ErrorInfo(code=code, message=message, details=details)
        )
