"""Request validation decorator.

``@validate_request`` inspects the view's type hints. Any parameter annotated
with a Pydantic model is filled from the request body (JSON, or form data
for plain HTML forms); every other parameter is passed through untouched,
so URL path parameters keep working:

    @bp.post("/signup")
    @validate_request
    def signup(data: UserCreate):
        ...

Validation failures are raised as RentalHub ValidationError (HTTP 400).
"""

from functools import wraps
from typing import get_type_hints

from flask import request
from pydantic import BaseModel, ValidationError

from ..exceptions import ValidationError as RHValidationError


def _request_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None and request.form:
        payload = request.form.to_dict()
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise RHValidationError(
            "Request body must be a JSON object",
            {"received": type(payload).__name__}
        )
    return payload


def _format_errors(exc: ValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        message = err["msg"].removeprefix("Value error, ")
        errors.append({"field": field, "message": message})
    return errors


def _summarize(errors: list[dict]) -> str:
    missing = [e["field"] for e in errors if e["message"] == "Field required"]
    if missing:
        return f"Please provide {' and '.join(missing)}"
    return "; ".join(f"{e['field']}: {e['message']}" for e in errors)


def validate_request(f):
    """Parse and validate the request body into the view's Pydantic model."""
    hints = get_type_hints(f)
    model_params = {
        name: hint
        for name, hint in hints.items()
        if name != "return" and isinstance(hint, type) and issubclass(hint, BaseModel)
    }

    @wraps(f)
    def wrapper(*args, **kwargs):
        if model_params:
            body = _request_body()
            for name, model in model_params.items():
                try:
                    kwargs[name] = model.model_validate(body)
                except ValidationError as e:
                    errors = _format_errors(e)
                    raise RHValidationError(_summarize(errors), {"errors": errors})
        return f(*args, **kwargs)

    return wrapper
