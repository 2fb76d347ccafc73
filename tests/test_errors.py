from pathguard.errors import (
    AccessDenied,
    ErrorResponse,
    GuardError,
    InvalidPath,
    error_response,
    success_response,
)


def test_error_response_serializes_details():
    error = ErrorResponse(code="ACCESS_DENIED", message="Nope", details={"path": "/etc"})

    assert error.to_dict() == {
        "code": "ACCESS_DENIED",
        "message": "Nope",
        "details": {"path": "/etc"},
    }


def test_guard_error_defaults_details():
    exc = GuardError("INVALID_TYPE", "Bad path")

    assert exc.error.to_dict() == {
        "code": "INVALID_TYPE",
        "message": "Bad path",
        "details": {},
    }


def test_access_denied_carries_path():
    exc = AccessDenied("/etc/passwd")

    assert isinstance(exc, GuardError)
    assert exc.error.code == "ACCESS_DENIED"
    assert exc.error.details == {"path": "/etc/passwd"}


def test_invalid_path_code():
    exc = InvalidPath("Root path must not be empty.")

    assert exc.error.code == "INVALID_PATH"
    assert str(exc) == "Root path must not be empty."


def test_response_envelopes():
    assert success_response({"path": "/a"}) == {"ok": True, "data": {"path": "/a"}}
    assert error_response(ErrorResponse("X", "y")) == {
        "ok": False,
        "error": {"code": "X", "message": "y", "details": {}},
    }
