"""Domain errors raised by the coupon and order services.

All three derive from ``ValueError`` so callers can still catch the broad
case; routers map each one to its own status code with ``http_error``.
"""

from fastapi import HTTPException


class NotFoundError(ValueError):
    """A referenced coupon or order does not exist."""


class InvalidArgumentError(ValueError):
    """Submitted coupon configuration is malformed."""


class InvalidStateError(ValueError):
    """A well-formed coupon cannot be used right now."""


def http_error(error: ValueError) -> HTTPException:
    """Map a domain error to the HTTP error returned to the client.

    ``InvalidStateError`` and any other ``ValueError`` become a 400.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidArgumentError):
        return HTTPException(status_code=422, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
