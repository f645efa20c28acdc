"""HTTP tests for the /api/v1/users endpoints."""

import pytest
from fastapi.testclient import TestClient

from classroom_users_api.app.services.user_service import get_user_service

BASE = "/api/v1/users"
ASHA_ID = "11111111-1111-4111-8111-111111111111"
RAVI_ID = "22222222-2222-4222-8222-222222222222"
MAYA_ID = "33333333-3333-4333-8333-333333333333"


def create(client, **payload):
    return client.post(BASE, json=payload)


def test_list_seeded_users(client):
    response = client.get(BASE)

    assert response.status_code == 200
    body = response.json()
    assert body["meta"] == {"limit": 10, "offset": 0, "total": 3}
    assert [user["name"] for user in body["data"]] == ["Asha", "Ravi", "Maya"]
    assert body["data"][0] == {
        "id": ASHA_ID,
        "name": "Asha",
        "email": "asha@example.com",
        "role": "student",
        "createdAt": "2025-09-24T00:00:00.000Z",
    }


def test_list_with_role_filter_and_sort(client):
    response = client.get(BASE, params={"role": "student", "sort": "name:desc"})

    body = response.json()
    assert body["meta"] == {"limit": 10, "offset": 0, "total": 2, "role": "student", "sort": "name:desc"}
    assert [user["name"] for user in body["data"]] == ["Ravi", "Asha"]


def test_list_pagination_reports_total_before_slicing(client):
    body = client.get(BASE, params={"limit": 2, "offset": 2}).json()
    assert body["meta"]["total"] == 3
    assert [user["name"] for user in body["data"]] == ["Maya"]

    body = client.get(BASE, params={"limit": 2, "offset": 10}).json()
    assert body["meta"]["total"] == 3
    assert body["data"] == []


def test_list_clamps_out_of_range_pagination(client):
    body = client.get(BASE, params={"limit": 500, "offset": -2}).json()
    assert body["meta"]["limit"] == 100
    assert body["meta"]["offset"] == 0
    assert len(body["data"]) == 3

    body = client.get(BASE, params={"limit": 0}).json()
    assert body["meta"]["limit"] == 1
    assert len(body["data"]) == 1


def test_list_rejects_non_numeric_limit(client):
    response = client.get(BASE, params={"limit": "ten"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "limit"


def test_list_ignores_unknown_sort_field(client):
    body = client.get(BASE, params={"sort": "email:asc"}).json()
    assert [user["name"] for user in body["data"]] == ["Asha", "Ravi", "Maya"]
    assert body["meta"]["sort"] == "email:asc"


def test_list_empty_store(empty_client):
    body = empty_client.get(BASE).json()
    assert body == {"meta": {"limit": 10, "offset": 0, "total": 0}, "data": []}


def test_get_user(client):
    response = client.get(f"{BASE}/{MAYA_ID}")

    assert response.status_code == 200
    assert response.json()["data"]["role"] == "instructor"


def test_get_missing_user(client):
    response = client.get(f"{BASE}/unknown-id")

    assert response.status_code == 404
    assert response.json() == {
        "error": {
            "message": "User with ID unknown-id not found",
            "code": "USER_NOT_FOUND",
            "details": [],
        }
    }


def test_create_user_defaults_role_and_sets_location(client):
    response = create(client, name="Alex Johnson", email="alex@example.com")

    assert response.status_code == 201
    user = response.json()["data"]
    assert user["role"] == "student"
    assert user["name"] == "Alex Johnson"
    assert user["createdAt"].endswith("Z")
    assert "updatedAt" not in user
    assert response.headers["Location"] == f"{BASE}/{user['id']}"
    assert client.get(response.headers["Location"]).json()["data"] == user


def test_create_duplicate_email_is_case_insensitive(client):
    assert create(client, name="Alex Johnson", email="alex@example.com").status_code == 201

    response = create(client, name="Alex Again", email="ALEX@example.com")

    assert response.status_code == 400
    assert response.json()["error"] == {
        "message": "Email already exists",
        "code": "VALIDATION_ERROR",
        "details": [],
    }
    assert client.get(BASE).json()["meta"]["total"] == 4


def test_create_reports_every_validation_problem(client):
    response = create(client, name="A", email="not-an-email", role="admin")

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Validation failed"
    assert {detail["field"]: detail["message"] for detail in error["details"]} == {
        "name": "Name must be at least 2 characters long",
        "email": "Please provide a valid email address",
        "role": 'Role must be either "student" or "instructor"',
    }


def test_create_requires_name_and_email(client):
    response = client.post(BASE, json={})

    messages = {detail["field"]: detail["message"] for detail in response.json()["error"]["details"]}
    assert response.status_code == 400
    assert messages == {"name": "Name is required", "email": "Email is required"}


def test_create_rejects_long_name(client):
    response = create(client, name="x" * 51, email="long@example.com")

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "name", "message": "Name must not exceed 50 characters"}
    ]


def test_create_strips_unknown_fields(client):
    response = create(client, name="Sam Lee", email="sam@example.com", id="forced", isAdmin=True)

    user = response.json()["data"]
    assert response.status_code == 201
    assert user["id"] != "forced"
    assert "isAdmin" not in user


def test_update_merges_fields(client):
    response = client.put(f"{BASE}/{RAVI_ID}", json={"name": "Ravi Kumar"})

    assert response.status_code == 200
    user = response.json()["data"]
    assert user["name"] == "Ravi Kumar"
    assert user["email"] == "ravi@example.com"
    assert user["role"] == "student"
    assert user["createdAt"] == "2025-09-24T00:00:00.000Z"
    assert user["updatedAt"].endswith("Z")


def test_update_rejects_one_character_name(client):
    response = client.put(f"{BASE}/{RAVI_ID}", json={"name": "X"})

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "name", "message": "Name must be at least 2 characters long"}
    ]
    assert client.get(f"{BASE}/{RAVI_ID}").json()["data"]["name"] == "Ravi"


def test_update_requires_at_least_one_field(client):
    response = client.put(f"{BASE}/{RAVI_ID}", json={})

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "", "message": "At least one field must be provided for update"}
    ]


def test_update_rejects_null_field(client):
    response = client.put(f"{BASE}/{RAVI_ID}", json={"name": None})

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "name"


def test_update_duplicate_email(client):
    response = client.put(f"{BASE}/{RAVI_ID}", json={"email": "Maya@example.com"})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Email already exists"
    assert client.get(f"{BASE}/{RAVI_ID}").json()["data"]["email"] == "ravi@example.com"


def test_update_missing_user(client):
    response = client.put(f"{BASE}/missing", json={"name": "Nobody"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


def test_delete_user_then_not_found(client):
    first = client.delete(f"{BASE}/{ASHA_ID}")
    second = client.delete(f"{BASE}/{ASHA_ID}")

    assert first.status_code == 204
    assert first.content == b""
    assert second.status_code == 404
    assert second.json()["error"]["message"] == f"User with ID {ASHA_ID} not found"
    assert client.get(BASE).json()["meta"]["total"] == 2


def test_unknown_route(client):
    response = client.get("/api/v1/courses")

    assert response.status_code == 404
    assert response.json() == {
        "error": {
            "message": "Route GET /api/v1/courses not found",
            "code": "ROUTE_NOT_FOUND",
            "details": [],
        }
    }


def test_unhandled_error_is_hidden(app):
    class BrokenService:
        async def get_user(self, user_id):
            raise RuntimeError("boom")

    app.dependency_overrides[get_user_service] = lambda: BrokenService()
    with TestClient(app, raise_server_exceptions=False) as broken_client:
        response = broken_client.get(f"{BASE}/{ASHA_ID}")
    app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {
        "error": {"message": "Internal Server Error", "code": "INTERNAL_ERROR", "details": []}
    }


def test_each_app_gets_its_own_store(client, empty_client):
    create(client, name="Only Here", email="only@example.com")
    assert empty_client.get(BASE).json()["meta"]["total"] == 0


@pytest.mark.parametrize("origin", ["http://localhost:5173", "https://example.org"])
def test_cors_allows_any_origin_by_default(client, origin):
    response = client.get(BASE, headers={"Origin": origin})
    assert response.headers["access-control-allow-origin"] == "*"


def test_classroom_scenario(client):
    """Seeded users, a new student and a case-insensitive duplicate."""
    created = create(client, name="Alex Johnson", email="alex@example.com")
    assert created.status_code == 201
    alex = created.json()["data"]
    assert alex["id"] and alex["role"] == "student"

    duplicate = create(client, name="Alex Johnson", email="ALEX@example.com")
    assert duplicate.status_code == 400

    students = client.get(BASE, params={"role": "student", "sort": "name:asc"}).json()
    assert [user["name"] for user in students["data"]] == ["Alex Johnson", "Asha", "Ravi"]
    assert students["meta"]["total"] == 3


def test_create_keeps_email_exactly_as_sent(client):
    response = create(client, name="Mixed Case", email="Mixed.Case@EXAMPLE.COM")

    assert response.status_code == 201
    user = response.json()["data"]
    assert user["email"] == "Mixed.Case@EXAMPLE.COM"
    assert client.get(f"{BASE}/{user['id']}").json()["data"]["email"] == "Mixed.Case@EXAMPLE.COM"
    assert create(client, name="Mixed Again", email="mixed.case@example.com").status_code == 400


def test_update_keeps_email_exactly_as_sent(client):
    response = client.put(f"{BASE}/{RAVI_ID}", json={"email": "Ravi.K@Example.ORG"})

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "Ravi.K@Example.ORG"


def test_update_rejects_invalid_email(client):
    response = client.put(f"{BASE}/{RAVI_ID}", json={"email": "ravi-at-example"})

    assert response.status_code == 400
    assert response.json()["error"]["details"] == [
        {"field": "email", "message": "Please provide a valid email address"}
    ]


def test_unsupported_method_is_reported_as_unknown_route(client):
    response = client.patch(f"{BASE}/{ASHA_ID}", json={"name": "Asha R"})

    assert response.status_code == 404
    assert response.json() == {
        "error": {
            "message": f"Route PATCH {BASE}/{ASHA_ID} not found",
            "code": "ROUTE_NOT_FOUND",
            "details": [],
        }
    }


def test_malformed_json_body(client):
    response = client.post(BASE, content=b'{"name": "Broken",', headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"] == [{"field": "", "message": "Request body must be valid JSON"}]
