"""
Request validation without FastAPI.

``validate_payload`` runs one of the request schemas against a raw payload
and reports every violation at once. The HTTP layer feeds FastAPI's own
validation errors through ``format_errors`` so both paths produce the same
``[{"field": ..., "message": ...}]`` list.
"""

from typing import Any, Dict, Iterable, List, Mapping, Type, Union

from pydantic import BaseModel, ValidationError

from app.exceptions import ServiceValidationError
from domain.schemas import (
    RegisterRequest,
    LoginRequest,
    UserUpdateRequest,
    MealCreate,
    MealUpdate,
    MealEntryCreate,
    MealEntryUpdate,
    GoalCreate,
    GoalUpdate,
)

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "register": RegisterRequest,
    "login": LoginRequest,
    "user_update": UserUpdateRequest,
    "meal_create": MealCreate,
    "meal_update": MealUpdate,
    "entry_create": MealEntryCreate,
    "entry_update": MealEntryUpdate,
    "goal_create": GoalCreate,
    "goal_update": GoalUpdate,
}

# FastAPI prefixes locations with where the value came from
_LOCATION_ROOTS = {"body", "query", "path", "header"}


def format_errors(errors: Iterable[Mapping[str, Any]]) -> List[Dict[str, str]]:
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        elif len(loc) > 1 and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        details.append(
            {"field": ".".join(loc) or "body", "message": str(error.get("msg", ""))}
        )
    return details


def validate_payload(
    schema: Union[str, Type[BaseModel]], payload: Any
) -> BaseModel:
    """Parse ``payload`` with ``schema`` (a model class or a SCHEMAS key)."""
    model = SCHEMAS[schema] if isinstance(schema, str) else schema
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ServiceValidationError(
            "Request validation failed", details=format_errors(exc.errors())
        ) from exc
