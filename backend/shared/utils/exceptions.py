"""
HTTP errors raised by the services and routers.

Each error logs itself when constructed, with whatever keyword context
the raiser passes, and reaches the client as ``{"detail": "..."}``
through FastAPI's HTTPException handling. Messages are Turkish, like
the rest of the back-office UI.

    raise NotFoundError("Tarif", recipe_id)                 # 404
    raise ValidationError(ErrorMessages.INVALID_INPUT)      # 400
    raise DuplicateEntityError("Kategori", name)            # 409
    raise ExportError("outlet", outlet_id=3)                # 500
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """Base error; subclasses pick the status code and log level."""

    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level = "warning"

    def __init__(
        self,
        detail: str,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        status_code = status_code or self.default_status
        getattr(logger, self.log_level)(
            detail,
            error=type(self).__name__,
            status_code=status_code,
            **log_context,
        )
        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 4xx
# =============================================================================


class NotFoundError(AppException):
    """'Restoran bulunamadı (ID: 3)'"""

    default_status = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        detail = f"{entity} bulunamadı"
        if entity_id is not None:
            detail += f" (ID: {entity_id})"
        super().__init__(detail, entity=entity, entity_id=entity_id, **log_context)


class ValidationError(AppException):
    """Input that passed schema validation but breaks a business rule."""

    default_status = status.HTTP_400_BAD_REQUEST


class ConflictError(AppException):
    default_status = status.HTTP_409_CONFLICT


class DuplicateEntityError(ConflictError):
    """A unique name or number is already taken: "Tarif 'RCP-2026-001' zaten mevcut"."""

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        detail = f"{entity} '{identifier}' zaten mevcut" if identifier else f"{entity} zaten mevcut"
        super().__init__(detail, entity=entity, identifier=identifier, **log_context)


# =============================================================================
# 5xx
# =============================================================================


class InternalError(AppException):
    log_level = "error"

    def __init__(self, detail: str = "Sunucu hatası", **log_context: Any):
        super().__init__(detail, **log_context)


class ExportError(InternalError):
    """Report generation failed; the client gets the generic message and no file."""

    DEFAULT_DETAIL = "Dışa aktarma sırasında bir hata oluştu"

    def __init__(self, report: str, **log_context: Any):
        super().__init__(self.DEFAULT_DETAIL, report=report, **log_context)
