"""Request body validation decorator.

@validate_request reads the view's signature, finds the body parameter
and fills it with the request JSON parsed into its Pydantic model.

The body parameter is the first parameter that is neither a path
parameter nor already supplied by an outer decorator (``claims``, or an
id parsed by @owner_required). It must be annotated with a BaseModel
subclass.

Example:
```python
@photos_bp.post("")
@auth_required
@validate_request
def create_photo(data: PhotoCreate, claims: TokenClaims):
    ...
```
"""

import inspect
import logging
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def _type_name(annotation) -> str:
    return getattr(annotation, "__name__", None) or str(annotation).replace("typing.", "")


def _format_errors(model: type[BaseModel], exc: PydanticValidationError) -> list[dict]:
    """Flatten pydantic errors into {field, message, expected_type} entries."""
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = ".".join(str(part) for part in loc)
        field_info = model.model_fields.get(str(loc[0])) if loc else None
        errors.append({
            "field": field,
            "message": err["msg"],
            "expected_type": _type_name(field_info.annotation) if field_info else "unknown",
        })
    return errors


def validate_request(f):
    """Validate the JSON body against the view's Pydantic annotation.

    Raises:
        TypeError: At decoration time if the view has no parameters or its
            first parameter is unannotated; at request time if the body
            parameter is not annotated with a BaseModel subclass
        ValidationError: If the body is missing or does not validate
    """
    params = list(inspect.signature(f).parameters.values())
    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")
    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(
            f"{f.__name__}: parameter '{params[0].name}' lacks a type annotation"
        )

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}
        body_param = next(
            (p for p in params if p.name not in view_args and p.name not in kwargs),
            None
        )
        if body_param is None:
            return f(*args, **kwargs)

        model = body_param.annotation
        if not (inspect.isclass(model) and issubclass(model, BaseModel)):
            raise TypeError(
                f"{f.__name__}: body parameter '{body_param.name}' must be annotated "
                "with a Pydantic BaseModel subclass"
            )

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError(
                "invalid request body",
                [{"field": "", "message": "Request body must be a JSON object",
                  "expected_type": model.__name__}]
            )

        try:
            kwargs[body_param.name] = model.model_validate(payload)
        except PydanticValidationError as e:
            logger.debug(f"{model.__name__} validation failed: {e.error_count()} errors")
            raise ValidationError("invalid request body", _format_errors(model, e)) from e

        return f(*args, **kwargs)

    return wrapper
