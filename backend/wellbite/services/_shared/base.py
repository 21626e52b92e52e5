# wellbite/services/_shared/base.py
from __future__ import annotations

from wellbite.core import errors as api_errors
from wellbite.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    IdentityMissingError,
    NotFoundError,
    ServiceError,
    SigningError,
)
from wellbite.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide a helper to run read-write units of work.
    * Centralize error translation.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work
      or a port whose adapter owns one.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        Authentication failures collapse into one generic 401 so callers cannot
        tell which check rejected them.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, AuthenticationError):
            # → 401 Unauthorized, detail deliberately generic
            return api_errors.Unauthorized()

        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            # → 409 Conflict
            return api_errors.Conflict(str(exc))

        if isinstance(exc, SigningError):
            # → 500, the key problem is an operator concern
            return api_errors.APIError(
                message="Unable to issue token",
                status_code=500,
                code="internal_server_error",
            )

        if isinstance(exc, IdentityMissingError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
