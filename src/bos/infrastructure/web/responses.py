"""Shared response helpers for the HTTP adapter."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from bos.infrastructure.bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container


def error_response(status_code: int, errors: list[str] | str) -> JSONResponse:
    """Error body: ``{"timestamp", "status", "errors": [...]}``.

    A single message may hold several errors separated by newlines.
    """
    if isinstance(errors, str):
        errors = [line for line in errors.split("\n") if line]
    return JSONResponse(
        status_code=status_code,
        content={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": status_code,
            "errors": errors,
        },
    )


def to_json(dto: Any) -> Any:
    return asdict(dto)
