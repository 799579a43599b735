"""
Shared fixtures: canned NPI registry payloads and a TestClient whose
registry calls are served by an httpx.MockTransport.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from api import app
from service import get_npi_client


def make_record(number, taxonomies, basic=None, addresses=None):
    return {
        "number": number,
        "basic": basic if basic is not None else {"first_name": "Jane", "last_name": "Doe"},
        "addresses": addresses if addresses is not None else [],
        "taxonomies": [{"code": c, "desc": d} for c, d in taxonomies],
    }


PSYCHOLOGIST = ("103TC0700X", "Psychologist, Clinical")
ADDICTION = ("101YA0400X", "Counselor, Addiction (Substance Use Disorder)")
MENTAL_HEALTH = ("101YM0800X", "Counselor, Mental Health")
MFT = ("106H00000X", "Marriage & Family Therapist")
SOCIAL_WORKER = ("1041C0700X", "Social Worker, Clinical")
FAMILY_MEDICINE = ("207Q00000X", "Family Medicine")


class RegistryStub:
    """Records outbound requests and answers with a fixed status and payload."""

    def __init__(self, payload=None, status_code=200, error=None):
        self.payload = payload if payload is not None else {"results": []}
        self.status_code = status_code
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def registry():
    return RegistryStub()


@pytest.fixture
def client(registry):
    async def override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(registry)) as c:
            yield c

    app.dependency_overrides[get_npi_client] = override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
