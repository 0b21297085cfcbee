from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..core.exceptions import (
    ConflictError,
    DomainError,
    NoCheckInFound,
    NotFound,
    ValidationError,
)
from .datetime_utils import parse_iso_date


def status_for(error: DomainError) -> int:
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, (ValidationError, NoCheckInFound)):
        return 400
    if isinstance(error, ConflictError):
        return 409
    return 400


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def body_date(data: dict, name: str) -> date:
    raw = data.get(name)
    if not raw:
        raise ValidationError(f"{name} is required")
    return _parse_date(str(raw), name)


def body_int(data: dict, name: str) -> int:
    try:
        return int(data[name])
    except KeyError:
        raise ValidationError(f"{name} is required")
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")


def arg_date(name: str) -> Optional[date]:
    raw = (request.args.get(name) or "").strip()
    return _parse_date(raw, name) if raw else None


def arg_int(name: str) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def arg_limit(default: int) -> int:
    limit = arg_int("limit")
    if limit is None:
        return default
    if limit < 1:
        raise ValidationError("limit must be a positive integer")
    return limit


def _parse_date(raw: str, name: str) -> date:
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return jsonify({"success": False, "code": error.code, "message": error.message}), status_for(error)
