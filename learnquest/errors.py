"""
learnquest/errors.py
Centralized Error Handling

ERROR RESPONSE STRUCTURE:
{
    "success": false,
    "error": "ErrorType",
    "message": "Human-readable description",
    "code": "UNIQUE_ERROR_CODE",
    "details": {} (optional)
}

HTTP STATUS CODE DISCIPLINE:
- 200/201/206: Successful request
- 400: Malformed request
- 404: Course, video, file, note, quiz or quest does not exist
- 416: Unsatisfiable byte range on a media request
- 422: Validation error (Pydantic)
- 429: Rate limit exceeded
- 500: Internal only (corrupt store file, unexpected failure)
"""

import logging
import uuid
from typing import Optional, Dict, Any

from fastapi import status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCode:
    """Unique error codes for machine-readable error handling"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"

    NOT_FOUND = "NOT_FOUND"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    NOTE_NOT_FOUND = "NOTE_NOT_FOUND"
    QUIZ_NOT_FOUND = "QUIZ_NOT_FOUND"
    QUEST_NOT_FOUND = "QUEST_NOT_FOUND"

    RANGE_NOT_SATISFIABLE = "RANGE_NOT_SATISFIABLE"
    RANGE_REQUIRED = "RANGE_REQUIRED"

    RATE_LIMITED = "RATE_LIMITED"

    STORE_CORRUPT = "STORE_CORRUPT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class APIError(Exception):
    """Base API exception with consistent structure"""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        self.status_code = status_code
        self.error = error
        self.message = message
        self.code = code
        self.details = details
        self.headers = headers
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        result = {
            "success": False,
            "error": self.error,
            "message": self.message,
            "code": self.code
        }
        if self.details:
            result["details"] = self.details
        return result

    def to_response(self) -> JSONResponse:
        """Convert to FastAPI JSONResponse"""
        return JSONResponse(
            status_code=self.status_code,
            content=self.to_dict(),
            headers=self.headers
        )


class NotFoundError(APIError):
    """404 Not Found - Resource does not exist"""
    def __init__(self, resource: str, identifier: Any = None, code: str = ErrorCode.NOT_FOUND):
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} '{identifier}' not found"
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="Not Found",
            message=message,
            code=code
        )


class RangeNotSatisfiableError(APIError):
    """416 Range Not Satisfiable - carries the Content-Range the client must respect"""
    def __init__(self, file_size: int, message: str = "Requested range not satisfiable",
                 code: str = ErrorCode.RANGE_NOT_SATISFIABLE):
        super().__init__(
            status_code=416,
            error="Range Not Satisfiable",
            message=message,
            code=code,
            details={"file_size": file_size},
            headers={"Content-Range": f"bytes */{file_size}"}
        )


class InternalError(APIError):
    """500 Internal Server Error - Use sparingly, only for true internal failures"""
    def __init__(self, message: str = "An internal error occurred", code: str = ErrorCode.INTERNAL_ERROR,
                 log_id: Optional[str] = None):
        details = {"log_id": log_id} if log_id else None
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="Internal Error",
            message=message,
            code=code,
            details=details
        )


def new_log_id() -> str:
    return str(uuid.uuid4())[:8]


ERROR_MAPPING = {
    400: ("Bad Request", ErrorCode.INVALID_INPUT),
    404: ("Not Found", ErrorCode.NOT_FOUND),
    416: ("Range Not Satisfiable", ErrorCode.RANGE_NOT_SATISFIABLE),
    422: ("Validation Error", ErrorCode.VALIDATION_ERROR),
    429: ("Too Many Requests", ErrorCode.RATE_LIMITED),
    500: ("Internal Error", ErrorCode.INTERNAL_ERROR),
}


def get_error_summary() -> Dict[str, Any]:
    """Return summary of error handling system for documentation"""
    return {
        "version": "1.0",
        "service": "learnquest-api",
        "response_structure": {
            "success": "boolean (always false for errors)",
            "error": "string (error type)",
            "message": "string (human-readable)",
            "code": "string (machine-readable)",
            "details": "object (optional)"
        },
        "status_codes": {
            str(code): name for code, (name, _) in ERROR_MAPPING.items()
        },
        "error_codes": [
            attr for attr in dir(ErrorCode)
            if not attr.startswith('_')
        ]
    }
