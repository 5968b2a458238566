"""
Tests for request validation contracts.

Schemas are exercised through validate_payload, the storage-agnostic entry
point, so every test also checks the error-detail shape.
"""

import pytest

from app.exceptions import ServiceValidationError
from domain.schemas import GoalUpdate, MealEntryCreate, MealEntryUpdate, RegisterRequest
from services.validation import SCHEMAS, format_errors, validate_payload


def fields_of(exc_info) -> set:
    return {d["field"] for d in exc_info.value.details}


# =============================================================================
# REGISTRATION / LOGIN
# =============================================================================


def test_register_valid_payload():
    data = validate_payload("register", {"email": "a@x.com", "password": "pw123456"})

    assert isinstance(data, RegisterRequest)
    assert data.name is None


def test_register_collects_every_violation():
    """
    Test that all violations are reported in one error.

    Verifies:
    - Bad email and short password are both listed
    - Each detail has field and message
    """
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload("register", {"email": "not-an-email", "password": "short"})

    assert fields_of(exc_info) == {"email", "password"}
    for detail in exc_info.value.details:
        assert set(detail) == {"field", "message"}
        assert detail["message"]
    assert exc_info.value.code == "VALIDATION_ERROR"


def test_register_missing_fields():
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload("register", {})

    assert fields_of(exc_info) == {"email", "password"}


def test_login_requires_non_empty_strings():
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload("login", {"email": "", "password": ""})

    assert fields_of(exc_info) == {"email", "password"}


# =============================================================================
# MEALS AND ENTRIES
# =============================================================================


def test_meal_date_must_be_datetime_string():
    assert validate_payload("meal_create", {"date": "2024-01-01T00:00:00Z"}).date.year == 2024

    for bad in (1704067200, "2024-01-01", "yesterday", "17040672000", "2024-13-01T08:00:00Z", None):
        with pytest.raises(ServiceValidationError) as exc_info:
            validate_payload("meal_create", {"date": bad})
        assert fields_of(exc_info) == {"date"}


def test_entry_create_uses_camel_case_field_names():
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload(
            "entry_create",
            {"foodName": "", "calories": -1, "protein": 1, "carbs": 1, "fat": 1, "quantity": 0},
        )

    assert fields_of(exc_info) == {"foodName", "calories", "quantity"}


def test_entry_create_defaults_quantity():
    entry = validate_payload(
        MealEntryCreate,
        {"foodName": "apple", "calories": 95, "protein": 0.5, "carbs": 25, "fat": 0.3},
    )

    assert entry.quantity == 1
    assert entry.food_name == "apple"


def test_entry_create_rejects_fractional_quantity():
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload(
            "entry_create",
            {"foodName": "egg", "calories": 1, "protein": 1, "carbs": 1, "fat": 1, "quantity": 1.5},
        )

    assert fields_of(exc_info) == {"quantity"}


def test_numeric_fields_reject_strings_and_booleans():
    """
    Test that numeric fields are not coerced from other JSON types.

    Verifies:
    - Numeric strings and booleans are rejected for macros and quantity
    - Whole numbers are still accepted for float macros
    - Goal targets reject strings and booleans too
    """
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload(
            "entry_create",
            {"foodName": "egg", "calories": "70", "protein": True, "carbs": "1", "fat": 5, "quantity": "2"},
        )
    assert fields_of(exc_info) == {"calories", "protein", "carbs", "quantity"}

    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload("entry_update", {"quantity": True})
    assert fields_of(exc_info) == {"quantity"}

    entry = validate_payload(
        "entry_create",
        {"foodName": "egg", "calories": 70, "protein": 6, "carbs": 1, "fat": 5},
    )
    assert entry.calories == 70.0

    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload(
            "goal_create", {"calories": "2000", "protein": True, "carbs": 200, "fat": 70}
        )
    assert fields_of(exc_info) == {"calories", "protein"}


def test_meal_date_keeps_offset():
    data = validate_payload("meal_create", {"date": "2024-01-01T20:00:00-05:00"})

    assert data.date.utcoffset().total_seconds() == -5 * 3600


def test_register_keeps_email_as_sent():
    data = validate_payload(
        "register", {"email": "Alice@Example.COM", "password": "pw123456"}
    )

    assert data.email == "Alice@Example.COM"


def test_entry_update_is_partial_but_rejects_null():
    data = validate_payload("entry_update", {"quantity": 3})

    assert isinstance(data, MealEntryUpdate)
    assert data.model_dump(exclude_unset=True) == {"quantity": 3}

    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload("entry_update", {"calories": None})
    assert fields_of(exc_info) == {"calories"}


# =============================================================================
# GOALS / PROFILE
# =============================================================================


def test_goal_targets_must_be_positive():
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload("goal_create", {"calories": 0, "protein": -5, "carbs": 200})

    assert fields_of(exc_info) == {"calories", "protein", "fat"}


def test_goal_update_accepts_subset():
    data = validate_payload(GoalUpdate, {"fat": 60})

    assert data.model_dump(exclude_unset=True) == {"fat": 60}


def test_user_update_rejects_bad_email_and_long_name():
    with pytest.raises(ServiceValidationError) as exc_info:
        validate_payload("user_update", {"email": "nope", "name": "x" * 101})

    assert fields_of(exc_info) == {"email", "name"}


def test_every_operation_has_a_schema():
    assert set(SCHEMAS) == {
        "register",
        "login",
        "user_update",
        "meal_create",
        "meal_update",
        "entry_create",
        "entry_update",
        "goal_create",
        "goal_update",
    }


# =============================================================================
# FORMAT_ERRORS
# =============================================================================


def test_format_errors_strips_request_location():
    errors = [
        {"loc": ("body", "foodName"), "msg": "too short"},
        {"loc": ("query", "date"), "msg": "bad date"},
        {"loc": ("body",), "msg": "field required"},
        {"loc": ("body", "entries", 0, "quantity"), "msg": "too small"},
    ]

    assert format_errors(errors) == [
        {"field": "foodName", "message": "too short"},
        {"field": "date", "message": "bad date"},
        {"field": "body", "message": "field required"},
        {"field": "entries.0.quantity", "message": "too small"},
    ]
