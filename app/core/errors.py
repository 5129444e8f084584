"""
Error taxonomy shared by services and routes.

Every error is an HTTPException so FastAPI renders it as {"detail": ...}
without extra handlers.
"""

from typing import Dict, Optional

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "User not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PermissionDeniedError(HTTPException):
    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class FormValidationError(HTTPException):
    """Field-level validation failure; `errors` maps field name to message."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(
            status_code=422,
            detail={"errors": self.errors},
        )


class BackendOperationError(HTTPException):
    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(
            status_code=status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )
