"""
Tests for user, account, deposit and withdrawal endpoints.

These test the HTTP layer: status codes, response format,
and error handling. Business logic is tested in
test_ledger_service.py and test_account_service.py.
"""

import uuid


def create_user(client, email="api@test.com"):
    return client.post("/users", json={"email": email}).json()


def open_account(client, owner_id, name="Main", currency=None):
    body = {"owner_id": owner_id, "name": name}
    if currency:
        body["currency"] = currency
    return client.post("/accounts", json=body).json()


class TestUsers:

    def test_create_user_returns_201(self, client):
        response = client.post("/users", json={"email": "api@test.com"})
        assert response.status_code == 201
        assert response.json()["email"] == "api@test.com"

    def test_duplicate_email_returns_409(self, client):
        create_user(client)
        response = client.post("/users", json={"email": "api@test.com"})

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "USER_ALREADY_EXISTS"


class TestAccounts:

    def test_open_account_returns_201(self, client):
        user = create_user(client)
        response = client.post("/accounts", json={
            "owner_id": user["id"],
            "name": "Savings",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["balance"] == "0.0000"
        assert data["currency"] == "NGN"
        assert data["owner_id"] == user["id"]
        assert data["is_system"] is False

    def test_open_account_unknown_owner_returns_404(self, client):
        response = client.post("/accounts", json={
            "owner_id": str(uuid.uuid4()),
            "name": "Savings",
        })
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "USER_NOT_FOUND"

    def test_get_account(self, client):
        user = create_user(client)
        account = open_account(client, user["id"])

        response = client.get(f"/accounts/{account['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == account["id"]

    def test_get_unknown_account_returns_404(self, client):
        response = client.get(f"/accounts/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "ACCOUNT_NOT_FOUND"

    def test_malformed_id_returns_422(self, client):
        response = client.get("/accounts/not-a-uuid")
        assert response.status_code == 422

    def test_list_accounts_by_owner(self, client):
        user = create_user(client)
        open_account(client, user["id"], name="One")
        open_account(client, user["id"], name="Two")

        response = client.get("/accounts", params={"owner_id": user["id"]})

        assert response.status_code == 200
        assert {a["name"] for a in response.json()} == {"One", "Two"}


class TestDepositEndpoint:

    def test_deposit_returns_transaction_id(self, client, settlement):
        user = create_user(client)
        account = open_account(client, user["id"])

        response = client.post(
            f"/accounts/{account['id']}/deposit", json={"amount": "100"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "deposit successful"
        uuid.UUID(data["transaction_id"])
        balance = client.get(f"/accounts/{account['id']}").json()["balance"]
        assert balance == "100.0000"

    def test_invalid_amount_returns_400(self, client, settlement):
        user = create_user(client)
        account = open_account(client, user["id"])

        response = client.post(
            f"/accounts/{account['id']}/deposit", json={"amount": "-5"}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_AMOUNT"

    def test_numeric_amount_returns_422(self, client, settlement):
        user = create_user(client)
        account = open_account(client, user["id"])

        response = client.post(
            f"/accounts/{account['id']}/deposit", json={"amount": 10.5}
        )

        assert response.status_code == 422

    def test_currency_mismatch_returns_400(self, client, settlement):
        user = create_user(client)
        account = open_account(client, user["id"], currency="USD")

        response = client.post(
            f"/accounts/{account['id']}/deposit", json={"amount": "10"}
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "CURRENCY_MISMATCH"
        assert detail["details"] == {"expected": "NGN", "actual": "USD"}

    def test_unknown_account_returns_404(self, client, settlement):
        response = client.post(
            f"/accounts/{uuid.uuid4()}/deposit", json={"amount": "10"}
        )
        assert response.status_code == 404


class TestWithdrawEndpoint:

    def test_withdraw_succeeds(self, client, settlement):
        user = create_user(client)
        account = open_account(client, user["id"])
        client.post(f"/accounts/{account['id']}/deposit", json={"amount": "100"})

        response = client.post(
            f"/accounts/{account['id']}/withdraw", json={"amount": "40"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "withdrawal successful"
        balance = client.get(f"/accounts/{account['id']}").json()["balance"]
        assert balance == "60.0000"

    def test_insufficient_funds_returns_400(self, client, settlement):
        user = create_user(client)
        account = open_account(client, user["id"])
        client.post(f"/accounts/{account['id']}/deposit", json={"amount": "30"})

        response = client.post(
            f"/accounts/{account['id']}/withdraw", json={"amount": "50"}
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "INSUFFICIENT_FUNDS"
        assert detail["details"]["requested"] == "50.0000"
        assert detail["details"]["available"] == "30.0000"


class TestRequestValidation:

    def test_malformed_email_returns_422(self, client):
        response = client.post("/users", json={"email": "not-an-email"})
        assert response.status_code == 422

    def test_non_letter_currency_returns_422(self, client):
        user = create_user(client)
        response = client.post("/accounts", json={
            "owner_id": user["id"],
            "name": "Savings",
            "currency": "N6N",
        })
        assert response.status_code == 422

    def test_lowercase_currency_accepted(self, client):
        user = create_user(client)
        account = open_account(client, user["id"], currency="usd")
        assert account["currency"] == "USD"
