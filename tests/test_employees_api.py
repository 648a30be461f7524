"""HTTP-level tests for the employee endpoints."""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from employee_api.dependencies import get_employee_service
from employee_api.main import app
from employee_api.services.employee_service import EmployeeService

from conftest import InMemoryEmployeeRepository

BASE_URL = "/api/v1/employee"

JANE = {
    "name": "Jane Doe",
    "email": "jane@x.com",
    "age": 30,
    "dateOfJoining": "2020-01-01",
    "isActive": True,
    "salary": 5000.00,
    "role": "ENGINEER",
}


@pytest.fixture
def client(service: EmployeeService) -> Iterator[TestClient]:
    """Client wired to in-memory collaborators; the lifespan is not run."""
    app.dependency_overrides[get_employee_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def assert_error_body(body: dict, status: int, error: str) -> None:
    assert body["status"] == status
    assert body["error"] == error
    assert body["timestamp"]
    assert body["message"]


class TestEmployeeLifecycle:
    """End-to-end flow through the API."""

    def test_create_read_patch_delete(self, client: TestClient) -> None:
        created = client.post(BASE_URL, json=JANE)
        assert created.status_code == 201
        employee = created.json()
        assert isinstance(employee["id"], int)
        assert {k: v for k, v in employee.items() if k != "id"} == JANE

        duplicate = client.post(BASE_URL, json=JANE)
        assert duplicate.status_code == 409
        assert_error_body(duplicate.json(), 409, "Conflict")

        fetched = client.get(f"{BASE_URL}/{employee['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == employee

        patched = client.patch(f"{BASE_URL}/{employee['id']}", json={"age": 31})
        assert patched.status_code == 200
        assert patched.json() == {**employee, "age": 31}

        deleted = client.delete(f"{BASE_URL}/{employee['id']}")
        assert deleted.status_code == 204
        assert deleted.content == b""

        missing = client.get(f"{BASE_URL}/{employee['id']}")
        assert missing.status_code == 404
        assert_error_body(missing.json(), 404, "Not Found")
        assert missing.json()["message"] == f"Employee not found with ID: {employee['id']}"

    def test_list(self, client: TestClient) -> None:
        client.post(BASE_URL, json=JANE)
        client.post(BASE_URL, json={**JANE, "name": "John Roe", "email": "john@x.com"})

        response = client.get(BASE_URL)

        assert response.status_code == 200
        assert [e["email"] for e in response.json()] == ["jane@x.com", "john@x.com"]

    def test_update_replaces_record(self, client: TestClient) -> None:
        employee = client.post(BASE_URL, json=JANE).json()
        replacement = {**JANE, "role": "MANAGER", "salary": 100000.99}

        response = client.put(f"{BASE_URL}/{employee['id']}", json=replacement)

        assert response.status_code == 200
        assert response.json() == {**replacement, "id": employee["id"]}

    def test_body_id_is_ignored_on_create(self, client: TestClient) -> None:
        response = client.post(BASE_URL, json={**JANE, "id": 999})

        assert response.status_code == 201
        assert response.json()["id"] != 999


class TestValidationErrors:
    """400 responses and their bodies."""

    def test_field_errors_are_listed(self, client: TestClient) -> None:
        response = client.post(BASE_URL, json={**JANE, "age": 17, "salary": 100.49})

        assert response.status_code == 400
        body = response.json()
        assert_error_body(body, 400, "Bad Request")
        assert body["message"] == "Validation failed"
        assert set(body["errors"]) == {"age", "salary"}

    def test_wrong_type_is_a_field_error(self, client: TestClient) -> None:
        response = client.post(BASE_URL, json={**JANE, "age": "thirty"})

        assert response.status_code == 400
        assert "age" in response.json()["errors"]

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            BASE_URL, content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"
        assert "errors" not in response.json()

    def test_non_numeric_id(self, client: TestClient) -> None:
        response = client.get(f"{BASE_URL}/abc")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

    @pytest.mark.parametrize("field", ["salary", "role", "dateOfJoining", "active", "nickname"])
    def test_patch_rejects_unpatchable_fields(
        self, client: TestClient, repository: InMemoryEmployeeRepository, field: str
    ) -> None:
        employee = client.post(BASE_URL, json=JANE).json()

        response = client.patch(f"{BASE_URL}/{employee['id']}", json={field: "x"})

        assert response.status_code == 400
        assert field in response.json()["message"]
        assert repository.rows[employee["id"]].salary == 5000

    def test_patch_unknown_id(self, client: TestClient) -> None:
        response = client.patch(f"{BASE_URL}/42", json={"age": 31})

        assert response.status_code == 404

    def test_type_error_is_reported_with_rule_violations(self, client: TestClient) -> None:
        response = client.post(
            BASE_URL, json={**JANE, "age": 17, "name": "J", "dateOfJoining": "not-a-date"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert set(body["errors"]) == {"age", "name", "dateOfJoining"}

    def test_patch_type_error_is_reported_with_rule_violations(self, client: TestClient) -> None:
        employee = client.post(BASE_URL, json=JANE).json()

        response = client.patch(f"{BASE_URL}/{employee['id']}", json={"age": "old", "name": "J"})

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"age", "name"}

    def test_patch_rejects_internal_active_name(
        self, client: TestClient, repository: InMemoryEmployeeRepository
    ) -> None:
        employee = client.post(BASE_URL, json=JANE).json()

        response = client.patch(f"{BASE_URL}/{employee['id']}", json={"active": False})

        assert response.status_code == 400
        assert response.json()["message"] == "Unrecognized field(s): active"
        assert repository.rows[employee["id"]].active is True

    def test_create_ignores_internal_names(self, client: TestClient) -> None:
        body = {k: v for k, v in JANE.items() if k not in ("dateOfJoining", "isActive")}

        response = client.post(
            BASE_URL, json={**body, "date_of_joining": "2020-01-01", "active": True}
        )

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"dateOfJoining", "isActive"}


class TestIdentifiers:
    """Ids outside the identity range."""

    @pytest.mark.parametrize("employee_id", [0, 3_000_000_000, 2**64])
    def test_absent_ids_are_not_found(self, client: TestClient, employee_id: int) -> None:
        response = client.get(f"{BASE_URL}/{employee_id}")

        assert response.status_code == 404
        assert_error_body(response.json(), 404, "Not Found")

    def test_huge_id_on_writes(self, client: TestClient) -> None:
        url = f"{BASE_URL}/{2**64}"

        assert client.put(url, json=JANE).status_code == 404
        assert client.patch(url, json={"age": 31}).status_code == 404
        assert client.delete(url).status_code == 404


class TestServerErrors:
    """500 responses never leak collaborator detail."""

    def test_database_failure(
        self, client: TestClient, repository: InMemoryEmployeeRepository
    ) -> None:
        from sqlalchemy.exc import OperationalError

        repository.get_all = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("password authentication failed"))
        )

        response = client.get(BASE_URL)

        assert response.status_code == 500
        body = response.json()
        assert_error_body(body, 500, "Internal Server Error")
        assert "password" not in body["message"]


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_security_headers(client: TestClient) -> None:
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Cache-Control"] == "no-store, max-age=0"
