"""Standard API envelope."""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = Field(description="Operation success flag")
    data: Optional[T] = Field(None, description="Response data")
    message: Optional[str] = Field(None, description="Response message")
    errors: Optional[List[Dict[str, Any]]] = Field(None, description="Error details")

    @classmethod
    def success_response(cls, data: Optional[T] = None, message: Optional[str] = None) -> "APIResponse[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def error_response(cls, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> "APIResponse[T]":
        return cls(success=False, data=None, message=message, errors=errors or [])
