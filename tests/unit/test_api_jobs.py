"""Tests for jobs API endpoints."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from freelance_market.db.models import Job, Profile


@pytest.mark.unit
class TestUnpaidJobsAPI:
    def test_client_unpaid_jobs(self, client: TestClient, as_profile):
        response = client.get("/jobs/unpaid", headers=as_profile(1))

        assert response.status_code == 200
        jobs = response.json()
        assert [job["id"] for job in jobs] == [2]
        assert jobs[0]["price"] == 201
        assert jobs[0]["paid"] is False
        assert jobs[0]["payment_date"] is None

    def test_contractor_unpaid_jobs(self, client: TestClient, as_profile):
        response = client.get("/jobs/unpaid", headers=as_profile(6))

        assert [job["id"] for job in response.json()] == [2, 3]

    def test_no_unpaid_jobs(self, client: TestClient, as_profile):
        response = client.get("/jobs/unpaid", headers=as_profile(3))

        assert response.status_code == 200
        assert response.json() == []

    def test_requires_profile(self, client: TestClient):
        assert client.get("/jobs/unpaid").status_code == 401


@pytest.mark.unit
class TestPayJobAPI:
    def test_pay_job(self, client: TestClient, as_profile, test_db):
        response = client.post("/jobs/2/pay", headers=as_profile(1))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 2
        assert data["paid"] is True
        assert data["payment_date"] is not None

        with test_db() as db:
            assert db.get(Profile, 1).balance == Decimal("949.00")
            assert db.get(Profile, 6).balance == Decimal("1415.00")
            assert db.get(Job, 2).paid is True

    def test_paying_twice_is_not_found(self, client: TestClient, as_profile):
        assert client.post("/jobs/2/pay", headers=as_profile(1)).status_code == 200

        response = client.post("/jobs/2/pay", headers=as_profile(1))

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "It is not possible to pay for this job"
        assert data["message"] == "There is no job to be paid"

    def test_insufficient_balance(self, client: TestClient, as_profile, test_db):
        # Ash has 1.3 and job 5 costs 200
        response = client.post("/jobs/5/pay", headers=as_profile(4))

        assert response.status_code == 400
        assert response.json()["error"] == "Your balance is not enough for paying this job"

        with test_db() as db:
            assert db.get(Profile, 4).balance == Decimal("1.30")
            assert db.get(Profile, 7).balance == Decimal("22.00")
            assert db.get(Job, 5).paid is False

    def test_someone_elses_job(self, client: TestClient, as_profile):
        response = client.post("/jobs/3/pay", headers=as_profile(1))

        assert response.status_code == 404

    def test_job_on_terminated_contract(self, client: TestClient, as_profile):
        response = client.post("/jobs/1/pay", headers=as_profile(1))

        assert response.status_code == 404

    def test_contractor_can_not_pay(self, client: TestClient, as_profile):
        response = client.post("/jobs/2/pay", headers=as_profile(6))

        assert response.status_code == 404

    def test_unknown_job(self, client: TestClient, as_profile):
        assert client.post("/jobs/999/pay", headers=as_profile(1)).status_code == 404

    def test_non_numeric_job_id(self, client: TestClient, as_profile):
        response = client.post("/jobs/abc/pay", headers=as_profile(1))

        assert response.status_code == 422
