import pycouchdb
from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ForbiddenError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=HTTP_403_FORBIDDEN, detail=detail)


class BadRequestError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)


class NotAuthenticatedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=HTTP_401_UNAUTHORIZED, detail=detail)


def store_failure(error: Exception, detail: str) -> HTTPException:
    """
    Turn a persistence error into the HTTP error handed back to the client.
    Errors that already carry a status keep it; everything else is a 500.
    """
    if isinstance(error, pycouchdb.exceptions.Conflict):
        return HTTPException(status_code=HTTP_409_CONFLICT, detail=detail)
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
