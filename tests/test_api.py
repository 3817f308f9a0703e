"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from kellysim.main import app


@pytest.fixture
def client():
    return TestClient(app)


def fixed_request(**overrides):
    body = {
        "initialFunds": 1000000,
        "winRate": 58,
        "fixedBetAmount": 20000,
        "dayCount": 10,
        "gamesPerDay": 4,
        "useRandomGameCount": False,
        "seed": 42,
    }
    body.update(overrides)
    return body


class TestSimulationEndpoint:

    def test_runs_simulation(self, client):
        response = client.post("/simulation", json=fixed_request())

        assert response.status_code == 200
        data = response.json()
        assert len(data["chartData"]) == 10
        assert len(data["dailySummaries"]) == 10
        assert len(data["log"]) == 10
        assert data["stats"]["totalWins"] + data["stats"]["totalLosses"] == 40
        assert [d["label"] for d in data["chartDatasets"]] == ["Flat", "Kelly/3", "HalfKelly/3"]
        assert data["config"]["winProbability"] == pytest.approx(0.58)

    def test_flat_bankroll_matches_record(self, client):
        data = client.post("/simulation", json=fixed_request()).json()
        stats = data["stats"]

        expected = 1000000 + stats["totalWins"] * 18000 - stats["totalLosses"] * 20000
        assert data["finalBankrolls"]["fixed"] == pytest.approx(expected)

    def test_same_seed_same_response(self, client):
        body = fixed_request(useRandomGameCount=True, dayCount=25)

        first = client.post("/simulation", json=body)
        second = client.post("/simulation", json=body)

        assert first.content == second.content

    def test_defaults_are_used(self, client):
        response = client.post("/simulation", json={"seed": 1})

        assert response.status_code == 200
        assert len(response.json()["chartData"]) == 100

    @pytest.mark.parametrize("overrides,field", [
        ({"dayCount": 0}, "day_count"),
        ({"gamesPerDay": -1}, "games_per_day"),
        ({"winRate": 150}, "win_rate"),
        ({"odds": 1.0}, "odds"),
        ({"fixedBetAmount": 0}, "fixed_bet_amount"),
        ({"dayCount": 10001}, "day_count"),
    ])
    def test_invalid_configuration(self, client, overrides, field):
        response = client.post("/simulation", json=fixed_request(**overrides))

        assert response.status_code == 422
        assert field in response.json()["detail"]

    def test_runaway_bankroll_returns_error_not_nulls(self, client):
        body = {"winRate": 100, "dayCount": 1000, "gamesPerDay": 6, "useRandomGameCount": False}

        response = client.post("/simulation", json=body)

        assert response.status_code == 422
        assert "bankroll exceeds" in response.json()["detail"]


class TestDefaultsEndpoint:

    def test_defaults(self, client):
        response = client.get("/simulation/defaults")

        assert response.status_code == 200
        data = response.json()
        assert data["initialFunds"] == 1000000
        assert data["winRate"] == 58.0
        assert data["fixedBetAmount"] == 20000
        assert data["dayCount"] == 100
        assert data["gamesPerDay"] == 4
        assert data["useRandomGameCount"] is True
        assert data["odds"] == 1.9
        assert data["maxBankroll"] == 1e15


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
