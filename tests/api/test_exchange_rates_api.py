"""
API tests for custom exchange-rate endpoints.
"""

import pytest
from fastapi.testclient import TestClient


class TestExchangeRatesAPI:
    """Tests for /exchange-rates."""

    def test_set_get_list_delete(self, client: TestClient):
        """
        GIVEN no overrides
        WHEN I PUT, GET, list and DELETE a CHF override
        THEN each step reflects the stored state
        """
        put = client.put("/exchange-rates/chf", json={"rate": 1.12})
        assert put.status_code == 200
        assert put.json() == {"currency": "CHF", "rate": pytest.approx(1.12)}

        assert client.get("/exchange-rates/CHF").json()["rate"] == pytest.approx(1.12)
        assert client.get("/exchange-rates").json()["count"] == 1

        assert client.delete("/exchange-rates/CHF").status_code == 204
        assert client.get("/exchange-rates/CHF").status_code == 404

    def test_invalid_rate_returns_400(self, client: TestClient):
        response = client.put("/exchange-rates/CHF", json={"rate": -1})

        assert response.status_code == 400

    def test_delete_missing_returns_404(self, client: TestClient):
        assert client.delete("/exchange-rates/SEK").status_code == 404

    def test_override_changes_account_balance(self, client: TestClient):
        """
        GIVEN a CHF account holding 100 USD of transactions
        WHEN I set CHF = 1.25 USD
        THEN the listed balance is 80 CHF
        """
        account = client.post("/accounts", json={"name": "CH", "currency": "CHF"}).json()
        client.post("/transactions", json={
            "account_id": account["id"], "date": "2024-06-01", "payee": "Pay", "amount": 100.0, "currency": "USD",
        })
        client.put("/exchange-rates/CHF", json={"rate": 1.25})

        data = client.get("/accounts").json()

        assert data["accounts"][0]["balance"] == pytest.approx(80.0)
