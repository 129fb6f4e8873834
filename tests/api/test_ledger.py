"""
Tests for the ledger read endpoints: entry history and
reconciliation.
"""

import uuid
from decimal import Decimal


def funded_account(client, amount="100"):
    user = client.post("/users", json={"email": "api@test.com"}).json()
    account = client.post(
        "/accounts", json={"owner_id": user["id"], "name": "Main"}
    ).json()
    client.post(f"/accounts/{account['id']}/deposit", json={"amount": amount})
    return account


class TestEntryHistory:

    def test_lists_entries(self, client, settlement):
        account = funded_account(client)

        response = client.get(f"/accounts/{account['id']}/entries")

        assert response.status_code == 200
        entries = response.json()
        assert len(entries) == 1
        assert entries[0]["credit"] == "100.0000"
        assert entries[0]["operation_type"] == "deposit"

    def test_pagination(self, client, settlement):
        account = funded_account(client, amount="1")
        for amount in ("2", "3"):
            client.post(
                f"/accounts/{account['id']}/deposit", json={"amount": amount}
            )

        response = client.get(
            f"/accounts/{account['id']}/entries",
            params={"limit": 1, "offset": 1},
        )

        assert [e["credit"] for e in response.json()] == ["2.0000"]

    def test_unknown_account_returns_404(self, client, settlement):
        response = client.get(
            "/accounts/00000000-0000-0000-0000-000000000000/entries"
        )
        assert response.status_code == 404


class TestReconcileEndpoints:

    def test_reconcile_account_matches(self, client, settlement):
        account = funded_account(client)

        response = client.get(f"/accounts/{account['id']}/reconcile")

        assert response.status_code == 200
        assert response.json() == {
            "account_id": account["id"],
            "matched": True,
            "stored_balance": "100.0000",
            "calculated_balance": "100.0000",
            "difference": "0.0000",
        }

    def test_drift_is_reported_not_raised(self, client, settlement, store):
        account = funded_account(client)
        with store.transaction() as q:
            q.accounts.update_balance(uuid.UUID(account["id"]), Decimal("-0.5"))

        response = client.get(f"/accounts/{account['id']}/reconcile")

        assert response.status_code == 200
        data = response.json()
        assert data["matched"] is False
        assert data["stored_balance"] == "99.5000"
        assert data["difference"] == "-0.5000"

    def test_reconcile_all(self, client, settlement):
        account = funded_account(client)

        response = client.get("/reconcile")

        assert response.status_code == 200
        results = {r["account_id"]: r for r in response.json()}
        assert set(results) == {account["id"], str(settlement.id)}
        assert all(r["matched"] for r in results.values())
        assert results[str(settlement.id)]["stored_balance"] == "-100.0000"
