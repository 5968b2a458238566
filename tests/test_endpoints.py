"""
HTTP endpoint tests through FastAPI's TestClient.

Covers the full request path: authentication, validation, ownership scoping,
persistence and the error envelope.
"""

from datetime import datetime, timezone

from fastapi.testclient import TestClient

from test_fixtures import (
    DEFAULT_PASSWORD,
    EGG,
    TOAST,
    add_entry,
    auth_headers,
    create_meal,
    register_and_login,
    unique_email,
)


def assert_error(resp, status_code: int, code: str):
    assert resp.status_code == status_code, resp.text
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert body["error"]["message"]
    datetime.fromisoformat(body["timestamp"])
    return body


# =============================================================================
# HEALTH
# =============================================================================


def test_health_check(client: TestClient):
    resp = client.get("/health-check")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert "X-Request-ID" in resp.headers


# =============================================================================
# AUTH
# =============================================================================


def test_register_and_login_scenario(client: TestClient):
    """
    Test registration and login.

    Verifies:
    - Register returns 201 with the public profile and no password
    - Login returns a bearer token with its lifetime and the user
    """
    resp = client.post("/register", json={"email": "a@x.com", "password": "pw123456"})
    assert resp.status_code == 201
    user = resp.json()
    assert user["email"] == "a@x.com"
    assert "password" not in user and "passwordHash" not in user

    resp = client.post("/login", json={"email": "a@x.com", "password": "pw123456"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"]
    assert body["tokenType"] == "Bearer"
    assert body["expiresIn"] == 7 * 24 * 60 * 60
    assert body["user"]["id"] == user["id"]


def test_register_mixed_case_email_then_login(client: TestClient):
    """
    Test that the stored email is exactly the one registered.

    Verifies:
    - Register echoes the address unchanged
    - Login with the same address and password succeeds
    """
    email = "Alice@Example.COM"
    resp = client.post("/register", json={"email": email, "password": DEFAULT_PASSWORD})
    assert resp.status_code == 201
    assert resp.json()["email"] == email

    resp = client.post("/login", json={"email": email, "password": DEFAULT_PASSWORD})
    assert resp.status_code == 200, resp.text
    assert resp.json()["user"]["email"] == email


def test_register_duplicate_email_is_400(client: TestClient):
    email = unique_email("dup")
    client.post("/register", json={"email": email, "password": DEFAULT_PASSWORD})

    resp = client.post("/register", json={"email": email, "password": DEFAULT_PASSWORD})

    assert_error(resp, 400, "CONFLICT")


def test_register_validation_details(client: TestClient):
    resp = client.post("/register", json={"email": "bad", "password": "short"})

    body = assert_error(resp, 400, "VALIDATION_ERROR")
    fields = {d["field"] for d in body["error"]["details"]}
    assert fields == {"email", "password"}


def test_login_bad_credentials_is_401(client: TestClient):
    email = unique_email()
    client.post("/register", json={"email": email, "password": DEFAULT_PASSWORD})

    resp = client.post("/login", json={"email": email, "password": "wrong-password"})

    assert_error(resp, 401, "UNAUTHORIZED")


def test_missing_token_is_401_and_bad_token_is_403(client: TestClient):
    assert_error(client.get("/meals"), 401, "UNAUTHORIZED")
    assert_error(
        client.get("/meals", headers={"Authorization": "Basic abc"}), 401, "UNAUTHORIZED"
    )
    assert_error(client.get("/meals", headers=auth_headers("garbage")), 403, "FORBIDDEN")


def test_token_for_deleted_user_is_401(client: TestClient):
    _, headers = register_and_login(client)
    assert client.delete("/users/me", headers=headers).status_code == 204

    assert_error(client.get("/users/me", headers=headers), 401, "UNAUTHORIZED")


# =============================================================================
# PROFILE
# =============================================================================


def test_profile_get_update(client: TestClient):
    user, headers = register_and_login(client, name="Sarah")

    resp = client.get("/users/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Sarah"

    resp = client.put("/users/me", json={"name": "Sarah M"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Sarah M"
    assert resp.json()["email"] == user["email"]


def test_profile_update_taken_email_is_400(client: TestClient):
    other, _ = register_and_login(client)
    _, headers = register_and_login(client)

    resp = client.put("/users/me", json={"email": other["email"]}, headers=headers)

    assert_error(resp, 400, "CONFLICT")


# =============================================================================
# MEALS AND ENTRIES
# =============================================================================


def test_meal_entry_summary_scenario(client: TestClient):
    """
    Test the end-to-end egg scenario.

    Verifies:
    - Meal creation returns 201 with the UTC date
    - Entry creation returns 201 with camelCase fields
    - Meal summary totals are 140/12/2/10
    """
    _, headers = register_and_login(client)

    meal = create_meal(client, headers, "2024-01-01T00:00:00Z")
    assert meal["id"] == 1
    assert datetime.fromisoformat(meal["date"].replace("Z", "+00:00")) == datetime(
        2024, 1, 1, tzinfo=timezone.utc
    )

    entry = add_entry(client, headers, meal["id"], EGG)
    assert entry["foodName"] == "egg"
    assert entry["mealId"] == meal["id"]
    assert entry["quantity"] == 2

    resp = client.get(f"/meals/{meal['id']}/summary", headers=headers)
    assert resp.status_code == 200
    summary = resp.json()
    assert summary["mealId"] == meal["id"]
    assert (summary["calories"], summary["protein"], summary["carbs"], summary["fat"]) == (
        140,
        12,
        2,
        10,
    )


def test_cross_user_meal_matches_missing_meal(client: TestClient):
    """
    Test that user B cannot see user A's meal.

    Verifies:
    - GET /meals/{A's id} as B returns 404
    - The body equals the body for a nonexistent id (apart from timestamp)
    """
    _, alice = register_and_login(client)
    _, bob = register_and_login(client)
    meal = create_meal(client, alice)
    add_entry(client, alice, meal["id"], EGG)

    foreign = client.get(f"/meals/{meal['id']}", headers=bob)
    missing = client.get("/meals/9999", headers=bob)

    assert_error(foreign, 404, "NOT_FOUND")
    assert_error(missing, 404, "NOT_FOUND")
    assert foreign.json()["error"] == missing.json()["error"]

    for method, path in (
        ("put", f"/meals/{meal['id']}"),
        ("delete", f"/meals/{meal['id']}"),
        ("get", f"/meals/{meal['id']}/entries"),
        ("get", f"/meals/{meal['id']}/summary"),
    ):
        kwargs = {"json": {"date": "2024-02-01T00:00:00Z"}} if method == "put" else {}
        resp = getattr(client, method)(path, headers=bob, **kwargs)
        assert_error(resp, 404, "NOT_FOUND")

    resp = client.post(f"/meals/{meal['id']}/entries", json=EGG, headers=bob)
    assert_error(resp, 404, "NOT_FOUND")

    # Alice still has her meal and entry
    resp = client.get(f"/meals/{meal['id']}", headers=alice)
    assert resp.status_code == 200
    assert len(resp.json()["entries"]) == 1


def test_list_meals_newest_first(client: TestClient):
    _, headers = register_and_login(client)
    first = create_meal(client, headers, "2024-01-01T08:00:00Z")
    second = create_meal(client, headers, "2024-01-02T08:00:00Z")

    resp = client.get("/meals", headers=headers)

    assert resp.status_code == 200
    assert [m["id"] for m in resp.json()] == [second["id"], first["id"]]


def test_meal_date_validation(client: TestClient):
    _, headers = register_and_login(client)

    for bad in ({"date": "2024-01-01"}, {"date": 123}, {}):
        resp = client.post("/meals", json=bad, headers=headers)
        body = assert_error(resp, 400, "VALIDATION_ERROR")
        assert body["error"]["details"][0]["field"] == "date"


def test_meal_date_digit_string_is_400(client: TestClient):
    _, headers = register_and_login(client)

    resp = client.post("/meals", json={"date": "17040672000"}, headers=headers)

    body = assert_error(resp, 400, "VALIDATION_ERROR")
    assert body["error"]["details"][0]["field"] == "date"
    assert client.get("/meals", headers=headers).json() == []


def test_timestamps_are_utc_aware(client: TestClient):
    """
    Test that every timestamp in a response carries a UTC offset.

    Verifies:
    - Meal date and createdAt are both aware
    - User createdAt and goal updatedAt are aware
    """
    user, headers = register_and_login(client)
    meal = create_meal(client, headers)
    goal = client.post(
        "/goals", json={"calories": 2000, "protein": 150, "carbs": 200, "fat": 70}, headers=headers
    ).json()

    detail = client.get(f"/meals/{meal['id']}", headers=headers).json()
    for value in (
        meal["date"],
        meal["createdAt"],
        detail["createdAt"],
        user["createdAt"],
        goal["updatedAt"],
    ):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        assert parsed.utcoffset() is not None
        assert parsed.utcoffset().total_seconds() == 0


def test_update_meal_date(client: TestClient):
    _, headers = register_and_login(client)
    meal = create_meal(client, headers)

    resp = client.put(
        f"/meals/{meal['id']}", json={"date": "2024-05-05T10:00:00Z"}, headers=headers
    )

    assert resp.status_code == 200
    assert resp.json()["date"].startswith("2024-05-05T10:00:00")


def test_delete_meal_cascades_entries(client: TestClient):
    _, headers = register_and_login(client)
    meal = create_meal(client, headers)
    entry = add_entry(client, headers, meal["id"], EGG)
    add_entry(client, headers, meal["id"], TOAST)

    resp = client.delete(f"/meals/{meal['id']}", headers=headers)
    assert resp.status_code == 204
    assert resp.content == b""

    assert_error(client.get(f"/meals/{meal['id']}", headers=headers), 404, "NOT_FOUND")
    assert_error(
        client.put(f"/entries/{entry['id']}", json={"quantity": 1}, headers=headers),
        404,
        "NOT_FOUND",
    )


def test_entry_validation_reports_every_field(client: TestClient):
    _, headers = register_and_login(client)
    meal = create_meal(client, headers)

    resp = client.post(
        f"/meals/{meal['id']}/entries",
        json={"foodName": "", "calories": -5, "protein": 1, "carbs": 1, "fat": 1, "quantity": 0},
        headers=headers,
    )

    body = assert_error(resp, 400, "VALIDATION_ERROR")
    assert {d["field"] for d in body["error"]["details"]} == {"foodName", "calories", "quantity"}


def test_entry_wrong_json_types_are_400(client: TestClient):
    _, headers = register_and_login(client)
    meal = create_meal(client, headers)

    resp = client.post(
        f"/meals/{meal['id']}/entries",
        json={"foodName": "egg", "calories": "70", "protein": True, "carbs": "1", "fat": 5, "quantity": "2"},
        headers=headers,
    )

    body = assert_error(resp, 400, "VALIDATION_ERROR")
    assert {d["field"] for d in body["error"]["details"]} == {
        "calories",
        "protein",
        "carbs",
        "quantity",
    }
    assert client.get(f"/meals/{meal['id']}/entries", headers=headers).json() == []


def test_entry_update_and_delete_under_meal(client: TestClient):
    _, headers = register_and_login(client)
    meal = create_meal(client, headers)
    entry = add_entry(client, headers, meal["id"], EGG)

    resp = client.put(
        f"/meals/{meal['id']}/entries/{entry['id']}", json={"quantity": 4}, headers=headers
    )
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 4
    assert resp.json()["calories"] == 70

    resp = client.put(
        f"/meals/{meal['id']}/entries/{entry['id']}", json={"quantity": None}, headers=headers
    )
    assert_error(resp, 400, "VALIDATION_ERROR")

    resp = client.delete(f"/meals/{meal['id']}/entries/{entry['id']}", headers=headers)
    assert resp.status_code == 204
    assert client.get(f"/meals/{meal['id']}/entries", headers=headers).json() == []


def test_entry_under_wrong_meal_is_404(client: TestClient):
    _, headers = register_and_login(client)
    first = create_meal(client, headers)
    second = create_meal(client, headers)
    entry = add_entry(client, headers, first["id"], EGG)

    resp = client.put(
        f"/meals/{second['id']}/entries/{entry['id']}", json={"quantity": 4}, headers=headers
    )

    assert_error(resp, 404, "NOT_FOUND")


def test_entry_by_id_scoped_through_meal(client: TestClient):
    _, alice = register_and_login(client)
    _, bob = register_and_login(client)
    meal = create_meal(client, alice)
    entry = add_entry(client, alice, meal["id"], EGG)

    assert_error(
        client.put(f"/entries/{entry['id']}", json={"quantity": 9}, headers=bob),
        404,
        "NOT_FOUND",
    )
    assert_error(client.delete(f"/entries/{entry['id']}", headers=bob), 404, "NOT_FOUND")

    resp = client.put(f"/entries/{entry['id']}", json={"foodName": "boiled egg"}, headers=alice)
    assert resp.status_code == 200
    assert resp.json()["foodName"] == "boiled egg"
    assert client.delete(f"/entries/{entry['id']}", headers=alice).status_code == 204


# =============================================================================
# SUMMARIES
# =============================================================================


def test_daily_summary_and_date_filter(client: TestClient):
    _, headers = register_and_login(client)
    breakfast = create_meal(client, headers, "2024-01-01T08:00:00Z")
    dinner = create_meal(client, headers, "2024-01-01T19:00:00Z")
    later = create_meal(client, headers, "2024-01-03T12:00:00Z")
    add_entry(client, headers, breakfast["id"], EGG)
    add_entry(client, headers, dinner["id"], TOAST)
    add_entry(client, headers, later["id"], TOAST)

    resp = client.get("/meals/daily-summary", headers=headers)
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["date"] for r in rows] == ["2024-01-03", "2024-01-01"]
    assert rows[1]["calories"] == 220
    assert rows[1]["mealCount"] == 2

    resp = client.get("/meals/daily-summary", params={"date": "2024-01-01"}, headers=headers)
    assert [r["date"] for r in resp.json()] == ["2024-01-01"]

    resp = client.get("/meals/daily-summary", params={"date": "2024-01-02"}, headers=headers)
    assert resp.json() == []


def test_summaries_all_and_by_date(client: TestClient):
    _, headers = register_and_login(client)
    first = create_meal(client, headers, "2024-01-01T08:00:00Z")
    second = create_meal(client, headers, "2024-01-02T08:00:00Z")
    add_entry(client, headers, first["id"], EGG)

    resp = client.get("/summaries", headers=headers)
    assert resp.status_code == 200
    assert [s["mealId"] for s in resp.json()] == [second["id"], first["id"]]
    assert resp.json()[1]["calories"] == 140
    assert resp.json()[0]["calories"] == 0

    resp = client.get("/summaries/2024-01-01", headers=headers)
    assert [s["mealId"] for s in resp.json()] == [first["id"]]
    assert resp.json()[0]["day"] == "2024-01-01"

    assert_error(client.get("/summaries/not-a-date", headers=headers), 400, "VALIDATION_ERROR")


# =============================================================================
# GOALS
# =============================================================================


def test_goal_upsert_twice_keeps_second_values(client: TestClient):
    _, headers = register_and_login(client)

    assert_error(client.get("/goals", headers=headers), 404, "NOT_FOUND")

    first = client.post(
        "/goals", json={"calories": 2000, "protein": 150, "carbs": 200, "fat": 70}, headers=headers
    )
    second = client.post(
        "/goals", json={"calories": 1800, "protein": 140, "carbs": 180, "fat": 60}, headers=headers
    )
    assert first.status_code == second.status_code == 200
    assert first.json()["id"] == second.json()["id"]

    goal = client.get("/goals", headers=headers).json()
    assert (goal["calories"], goal["protein"], goal["carbs"], goal["fat"]) == (1800, 140, 180, 60)


def test_goal_partial_update_and_delete(client: TestClient):
    _, headers = register_and_login(client)

    assert_error(client.put("/goals", json={"fat": 50}, headers=headers), 404, "NOT_FOUND")

    client.post(
        "/goals", json={"calories": 2000, "protein": 150, "carbs": 200, "fat": 70}, headers=headers
    )
    resp = client.put("/goals", json={"fat": 50}, headers=headers)
    assert resp.status_code == 200
    assert (resp.json()["calories"], resp.json()["fat"]) == (2000, 50)

    assert_error(client.put("/goals", json={"fat": 0}, headers=headers), 400, "VALIDATION_ERROR")

    assert client.delete("/goals", headers=headers).status_code == 204
    assert_error(client.get("/goals", headers=headers), 404, "NOT_FOUND")


def test_goal_progress(client: TestClient):
    _, headers = register_and_login(client)
    client.post(
        "/goals", json={"calories": 2000, "protein": 150, "carbs": 200, "fat": 70}, headers=headers
    )
    meal = create_meal(client, headers, "2024-01-01T08:00:00Z")
    add_entry(client, headers, meal["id"], EGG)

    resp = client.get("/goals/progress", params={"date": "2024-01-01"}, headers=headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["date"] == "2024-01-01"
    assert body["goal"]["calories"] == 2000
    assert body["consumed"]["calories"] == 140
    assert body["remaining"]["calories"] == 1860


def test_goals_are_private(client: TestClient):
    _, alice = register_and_login(client)
    _, bob = register_and_login(client)
    client.post(
        "/goals", json={"calories": 2000, "protein": 150, "carbs": 200, "fat": 70}, headers=alice
    )

    assert_error(client.get("/goals", headers=bob), 404, "NOT_FOUND")


# =============================================================================
# ACCOUNT DELETION
# =============================================================================


def test_delete_account_removes_data(client: TestClient):
    user, headers = register_and_login(client)
    meal = create_meal(client, headers)
    add_entry(client, headers, meal["id"], EGG)

    assert client.delete("/users/me", headers=headers).status_code == 204

    # The email is free again and the new account starts empty
    _, new_headers = register_and_login(client, email=user["email"])
    assert client.get("/meals", headers=new_headers).json() == []
