"""Tests for the balance and statement endpoints."""

from datetime import date

from app.services.ledger import LedgerService

from tests.conftest import (
    add_opening_balance,
    add_payment_in,
    add_payment_out,
    add_purchase,
    add_sale,
    add_sale_return,
)


class TestBalanceEndpoint:

    def test_returns_balance_as_three_place_string(self, client, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "100")
        add_payment_in(db, customer, date(2024, 1, 10), "40")

        response = client.get(f"/api/v1/parties/{customer.id}/balance")

        assert response.status_code == 200
        body = response.json()
        assert body["balance"] == "60.000"
        assert body["party_type"] == "customer"

    def test_as_of(self, client, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "100")
        add_payment_in(db, customer, date(2024, 1, 10), "40")

        response = client.get(f"/api/v1/parties/{customer.id}/balance", params={"as_of": "2024-01-09"})

        assert response.json()["balance"] == "100.000"
        assert response.json()["as_of"] == "2024-01-09"

    def test_unknown_party_is_404(self, client):
        response = client.get("/api/v1/parties/4242/balance")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "PARTY_NOT_FOUND"
        assert body["errors"] == [{"party_id": 4242}]

    def test_wrong_party_type_is_404(self, client, supplier):
        response = client.get(f"/api/v1/parties/{supplier.id}/balance", params={"party_type": "customer"})
        assert response.status_code == 404

    def test_bad_date_is_422(self, client, customer):
        response = client.get(f"/api/v1/parties/{customer.id}/balance", params={"as_of": "yesterday"})

        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"


class TestStatementEndpoint:

    def test_supplier_statement(self, client, db, supplier):
        add_opening_balance(db, supplier, date(2023, 12, 31), "500")
        add_purchase(db, supplier, date(2024, 2, 1), "200")
        add_payment_out(db, supplier, date(2024, 2, 15), "300")

        response = client.get(
            f"/api/v1/parties/{supplier.id}/statement",
            params={"start_date": "2024-01-01", "end_date": "2024-02-28"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["party"]["id"] == supplier.id
        assert body["opening_balance"] == "500.000"
        assert body["closing_balance"] == "400.000"

        entries = body["entries"]
        assert [e["kind"] for e in entries] == ["brought_forward", "purchase", "payment_out"]
        assert entries[0]["description"] == "Balance Brought Forward"
        assert entries[0]["date"] == "2024-01-01"
        assert entries[0]["reference_id"] is None
        assert [e["running_balance"] for e in entries] == ["500.000", "700.000", "400.000"]
        assert entries[2]["debit"] == "0.000"
        assert entries[2]["credit"] == "300.000"

    def test_invalid_range_is_400(self, client, customer):
        response = client.get(
            f"/api/v1/parties/{customer.id}/statement",
            params={"start_date": "2024-03-01", "end_date": "2024-02-01"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "INVALID_DATE_RANGE"
        assert body["message"] == "invalid date range"

    def test_unknown_party_is_404(self, client):
        response = client.get("/api/v1/parties/77/statement")
        assert response.status_code == 404


class TestCustomerStatement:

    def test_customer_statement(self, client, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "100")

        response = client.get("/api/v1/customer-statement", params={"customer_id": customer.id})

        assert response.status_code == 200
        assert response.json()["closing_balance"] == "100.000"
        assert response.json()["party_type"] == "customer"

    def test_supplier_id_is_rejected(self, client, supplier):
        response = client.get("/api/v1/customer-statement", params={"customer_id": supplier.id})
        assert response.status_code == 404

    def test_customer_id_required(self, client):
        response = client.get("/api/v1/customer-statement")
        assert response.status_code == 422

    def test_public_statement(self, client, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "12.5")
        add_payment_in(db, customer, date(2024, 1, 6), "2.5")

        response = client.get(f"/api/v1/public/statement/{customer.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["party"]["name"] == customer.name
        assert [e["running_balance"] for e in body["entries"]] == ["12.500", "10.000"]

    def test_zero_value_return_renders_unsigned(self, client, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "10")
        add_sale_return(db, customer, date(2024, 1, 6), "0")

        entries = client.get(f"/api/v1/parties/{customer.id}/statement").json()["entries"]

        assert entries[1]["kind"] == "sale_return"
        assert entries[1]["signed_amount"] == "0.000"
        assert entries[1]["credit"] == "0.000"
        assert entries[1]["running_balance"] == "10.000"


class TestPartyResolution:

    def test_balance_resolves_party_once(self, client, db, customer, monkeypatch):
        calls = []
        original = LedgerService.get_ledger_party

        def counting(self, party_id, party_type=None):
            calls.append(party_id)
            return original(self, party_id, party_type)

        monkeypatch.setattr(LedgerService, "get_ledger_party", counting)

        response = client.get(f"/api/v1/parties/{customer.id}/balance")

        assert response.status_code == 200
        assert response.json()["currency"] == "KWD"
        assert calls == [customer.id]

    def test_statement_resolves_party_once(self, client, db, customer, monkeypatch):
        calls = []
        original = LedgerService.get_ledger_party

        def counting(self, party_id, party_type=None):
            calls.append(party_id)
            return original(self, party_id, party_type)

        monkeypatch.setattr(LedgerService, "get_ledger_party", counting)

        response = client.get(f"/api/v1/parties/{customer.id}/statement")

        assert response.status_code == 200
        assert response.json()["currency"] == "KWD"
        assert calls == [customer.id]

    def test_invalid_range_wins_over_unknown_party(self, client):
        response = client.get(
            "/api/v1/parties/4242/statement",
            params={"start_date": "2024-03-01", "end_date": "2024-02-01"},
        )
        assert response.status_code == 400
