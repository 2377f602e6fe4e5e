"""Tests for problem-details error rendering."""

import json

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from freelance_market.api.middleware import (
    ProblemDetailsException,
    install_problem_details,
    problem_response,
)
from freelance_market.domain.results import ErrorKind, fail


class Payload(BaseModel):
    amount: int


@pytest.fixture
def problem_client():
    app = FastAPI()
    install_problem_details(app)

    @app.get("/failure/{kind}")
    async def domain_failure(kind: str):
        raise ProblemDetailsException.from_failure(fail(ErrorKind(kind), "occurrence detail"))

    @app.get("/http")
    async def plain_http_error():
        raise HTTPException(status_code=401, detail="Missing profile_id header")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    @app.post("/validate")
    async def validate(payload: Payload):
        return payload

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.mark.unit
class TestProblemDetails:
    @pytest.mark.parametrize(
        "kind,status_code",
        [
            (ErrorKind.INVALID_PARTY, 400),
            (ErrorKind.INVALID_AMOUNT, 400),
            (ErrorKind.INSUFFICIENT_FUNDS, 400),
            (ErrorKind.DEPOSIT_LIMIT_EXCEEDED, 400),
            (ErrorKind.JOB_NOT_FOUND, 404),
        ],
    )
    def test_failure_status_mapping(self, problem_client, kind, status_code):
        response = problem_client.get(f"/failure/{kind.value}")

        assert response.status_code == status_code
        assert response.headers["content-type"] == "application/problem+json"
        data = response.json()
        assert data["error"] == kind.summary
        assert data["message"] == "occurrence detail"
        assert data["type"] == f"urn:freelance-market:error:{kind.value}"
        assert data["status"] == status_code

    def test_http_exception(self, problem_client):
        response = problem_client.get("/http")

        assert response.status_code == 401
        data = response.json()
        assert data["title"] == "Unauthorized"
        assert data["error"] == "Unauthorized"
        assert data["message"] == "Missing profile_id header"

    def test_unknown_route(self, problem_client):
        response = problem_client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["title"] == "Not Found"

    def test_validation_error(self, problem_client):
        response = problem_client.post("/validate", json={"amount": "lots"})

        assert response.status_code == 422
        data = response.json()
        assert data["title"] == "Validation Error"
        assert data["errors"]

    def test_unexpected_exception_is_a_500_problem(self, problem_client):
        response = problem_client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "An unexpected error occurred"
        assert "exploded" not in response.text

    def test_problem_response_without_detail(self):
        response = problem_response(status_code=503, title="Service Unavailable")

        assert response.status_code == 503
        assert json.loads(response.body) == {
            "type": "https://httpstatuses.com/503",
            "title": "Service Unavailable",
            "status": 503,
            "error": "Service Unavailable",
            "message": None,
        }
