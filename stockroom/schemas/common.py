"""
Stockroom Common Schemas
Shared Pydantic models for common API structures
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

# Record identifiers are 24 hexadecimal characters
OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"


class APIModel(BaseModel):
    """Base for request/response bodies exchanged in camelCase"""
    # Quantities must be finite; json.loads accepts Infinity and NaN literals
    model_config = ConfigDict(populate_by_name=True, from_attributes=True, allow_inf_nan=False)


class ErrorResponse(BaseModel):
    """
    Standard error response model

    Used for all API error responses
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "error": "Insufficient stock. Available: 4, Requested: 10",
                "code": "INSUFFICIENT_STOCK",
            }
        },
    )

    error: str = Field(..., description="Human-readable error message")
    code: Optional[str] = Field(None, description="Machine-readable error code")
    field_errors: Optional[Dict[str, List[str]]] = Field(
        None,
        alias="fieldErrors",
        description="Field-specific validation errors"
    )


class MessageResponse(BaseModel):
    """Response for operations that only report a message"""
    message: str
