"""Unit tests for staff authentication

Tests cover:
- Correct bearer key recognized
- Wrong key, wrong scheme, missing header not privileged
- No configured key means nobody is staff
"""

from __future__ import annotations

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from pasteq.api.middleware.auth import StaffAuth


def create_test_app(api_key: str | None):
    auth_instance = StaffAuth(api_key=api_key)
    test_app = FastAPI()

    @test_app.get("/whoami")
    async def whoami(staff: str | None = Depends(auth_instance.staff_identity)):
        return {"staff": staff}

    return test_app


def test_correct_key_is_privileged():
    assert StaffAuth(api_key="k-123").is_privileged("Bearer k-123")
    assert StaffAuth(api_key="k-123").is_privileged("bearer k-123")


def test_wrong_key_or_scheme_not_privileged():
    auth = StaffAuth(api_key="k-123")

    assert not auth.is_privileged("Bearer k-124")
    assert not auth.is_privileged("Basic k-123")
    assert not auth.is_privileged("Bearerk-123")
    assert not auth.is_privileged("Bearer k-123 extra")
    assert not auth.is_privileged(None)


def test_no_configured_key_fails_closed():
    auth = StaffAuth(api_key="")

    assert not auth.is_privileged("Bearer ")
    assert not auth.is_privileged("Bearer anything")


def test_dependency_reports_staff_identity():
    client = TestClient(create_test_app("k-123"))

    assert client.get("/whoami", headers={"Authorization": "Bearer k-123"}).json() == {
        "staff": "staff"
    }
    assert client.get("/whoami").json() == {"staff": None}
