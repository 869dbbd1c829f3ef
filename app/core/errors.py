from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException, status


def _fail(status_code: int, code: str, message: str) -> NoReturn:
    raise HTTPException(status_code=status_code, detail={"code": code, "message": message})


def bad_request(code: str, message: str) -> NoReturn:
    _fail(status.HTTP_400_BAD_REQUEST, code, message)


def not_found(code: str, message: str) -> NoReturn:
    _fail(status.HTTP_404_NOT_FOUND, code, message)


def service_unavailable(code: str, message: str) -> NoReturn:
    """Upstream mapping API is unreachable or answered with an error."""
    _fail(status.HTTP_503_SERVICE_UNAVAILABLE, code, message)
