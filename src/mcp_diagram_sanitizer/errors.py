"""Error types raised by the tool and storage surfaces (the engine itself never raises)."""

from typing import Any, Dict, Optional


class DiagramServiceError(Exception):
    """Base exception for the diagram sanitizer service."""

    def __init__(
        self,
        message: str,
        code: int = -32603,
        data: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data or {}

    def to_tool_result(self, **extra: Any) -> Dict[str, Any]:
        """Convert to the error payload returned by a tool call."""
        result: Dict[str, Any] = {"error": self.message, "code": self.code}

        if self.data:
            result["data"] = self.data

        result.update(extra)
        return result


class InvalidRequestError(DiagramServiceError):
    """Tool arguments failed validation."""

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=-32602, data=data)


class ModelUnavailableError(DiagramServiceError):
    """The regeneration model is not configured or its client failed to start."""

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=-32001, data=data)


class EmptyModelResponseError(DiagramServiceError):
    """The model answered a regeneration request with no text."""

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=-32001, data=data)


class HistoryStoreError(DiagramServiceError):
    """The project history file could not be written."""

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=-32002, data=data)
