"""
Response envelopes for the VideoHub API.

Every successful response is wrapped in ``ApiResponse`` and every error in
``ErrorResponse``.
"""

from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope"""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode", description="HTTP status code")
    data: Optional[T] = Field(None, description="Response payload")
    message: str = Field("Success", description="Human readable message")
    success: bool = Field(True, description="True for status codes below 400")

    @classmethod
    def build(cls, status_code: int, data: Any, message: str = "Success") -> "ApiResponse":
        return cls(status_code=status_code, data=data, message=message, success=status_code < 400)


class ErrorResponse(BaseModel):
    """Error envelope"""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode", description="HTTP status code")
    message: str = Field(..., description="Human readable error message")
    success: bool = Field(False, description="Always false")
    errors: List[Any] = Field(default_factory=list, description="Detailed error entries")


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    timestamp: str
    database: dict
