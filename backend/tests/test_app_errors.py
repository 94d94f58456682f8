from app.core.exceptions import AppError, ResourceNotFoundError, ValidationError


def test_app_error_defaults():
    err = AppError("Generic error")
    assert err.status_code == 500
    assert err.details == {}


def test_validation_error_structure():
    err = ValidationError("Day of week must be between 1 (Monday) and 7 (Sunday)", details={"dayOfWeek": 9})
    assert err.status_code == 422
    assert err.details == {"dayOfWeek": 9}
    assert isinstance(err, AppError)


def test_not_found_error_message():
    err = ResourceNotFoundError("Room", "r-1")
    assert err.status_code == 404
    assert err.message == "Room with id r-1 not found"


def test_oversized_request_body_is_rejected(client):
    response = client.post(
        "/api/v1/timetables",
        content=b"x" * 1_000_001,
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 413
    assert response.json()["details"]["max_bytes"] == 1_000_000


def test_responses_carry_request_id(client):
    response = client.get("/api/v1/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert client.get("/api/v1/health").headers["X-Request-ID"]
