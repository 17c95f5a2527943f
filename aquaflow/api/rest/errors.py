from fastapi import HTTPException

from aquaflow.core.errors import ROW_LEVEL_SECURITY, ErrorKind, Result

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONSTRAINT: 409,
    ErrorKind.TRANSPORT: 503,
    ErrorKind.UNKNOWN: 500,
}


def unwrap(result: Result):
    """Return the data of a successful result or raise the matching HTTPException"""
    if result.ok:
        return result.data

    error = result.error
    status_code = 403 if error.code == ROW_LEVEL_SECURITY else STATUS_BY_KIND[error.kind]
    raise HTTPException(status_code=status_code, detail=error.message)
