"""
Error types for the Shirokuma SDK.

This module defines all exception types raised by the SDK:
- ShirokumaError: Base exception
- InvalidArgumentError: A required parameter is missing or empty
- ConfigurationError: No key pair or schema id available
- TransportError: GraphQL request failed or returned an unusable response
- ValidationError: Field values do not match the schema
- UnknownFieldError: Unknown field in operation fields
- FieldNotFoundError: Document has no field with the requested name

Invariants:
    - All errors inherit from ShirokumaError
    - InvalidArgumentError and ConfigurationError are raised before any
      network call is made
    - TransportError keeps the underlying exception as __cause__
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ShirokumaError(Exception):
    """Base exception for all Shirokuma SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "SHIROKUMA_ERROR"
        self.details = details or {}


class InvalidArgumentError(ShirokumaError):
    """A required parameter is missing.

    Raised when:
    - fields are missing for create or update
    - previous view id is missing for update or delete
    - public key, entry or operation is empty
    """

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="INVALID_ARGUMENT",
            details={"argument": argument},
        )
        self.argument = argument


class ConfigurationError(ShirokumaError):
    """Session is missing a key pair or schema id.

    Raised when neither the per-call options nor the session defaults
    provide the required value.
    """

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting},
        )
        self.setting = setting


class TransportError(ShirokumaError):
    """GraphQL request failed.

    Raised when:
    - The endpoint is unreachable or the request times out
    - The server answers with a non-success status
    - The response is not JSON or carries GraphQL errors
    - The response misses its expected field or has a malformed payload
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(
            message,
            code="TRANSPORT_ERROR",
            details={
                "endpoint": endpoint,
                "status_code": status_code,
                "errors": errors or [],
            },
        )
        self.endpoint = endpoint
        self.status_code = status_code
        self.errors = errors or []


class ValidationError(ShirokumaError):
    """Operation fields failed validation.

    Raised when:
    - A value has the wrong type for its schema field
    - A value type cannot be mapped to any field kind
    - A required schema field is missing
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"field": field_name, "errors": errors or []},
        )
        self.field_name = field_name
        self.errors = errors or []


class UnknownFieldError(ShirokumaError):
    """Unknown field in operation fields.

    Includes suggestions for similar field names.

    Attributes:
        field_name: The unknown field
        schema_name: The schema being written
        suggestions: Similar field names
    """

    def __init__(
        self,
        field_name: str,
        schema_name: str,
        suggestions: Optional[List[str]] = None,
    ) -> None:
        suggestions = suggestions or []
        msg = f"Unknown field '{field_name}' in schema '{schema_name}'"
        if suggestions:
            msg += f". Did you mean: {', '.join(suggestions)}?"

        super().__init__(
            msg,
            code="UNKNOWN_FIELD",
            details={
                "field_name": field_name,
                "schema_name": schema_name,
                "suggestions": suggestions,
            },
        )
        self.field_name = field_name
        self.schema_name = schema_name
        self.suggestions = suggestions


class FieldNotFoundError(ShirokumaError):
    """Document has no field with this name."""

    def __init__(
        self,
        field_name: str,
        document_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Document has no field '{field_name}'",
            code="FIELD_NOT_FOUND",
            details={"field_name": field_name, "document_id": document_id},
        )
        self.field_name = field_name
        self.document_id = document_id
