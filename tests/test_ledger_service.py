"""
Tests for LedgerService.

Balances and statements are computed from real rows in an in-memory
database, created through the same services the API uses.
"""

from datetime import date
from decimal import Decimal

import pytest

from app.common.exceptions import InvalidDateRange, PartyNotFound
from app.models.party import PartyType
from app.services.ledger import LedgerKind, LedgerService
from app.services.sale_service import delete_sales_order
from tests.conftest import (
    add_opening_balance,
    add_payment_in,
    add_payment_out,
    add_purchase,
    add_purchase_return,
    add_sale,
    add_sale_return,
)


class TestCurrentBalance:
    """Tests for LedgerService.current_balance()."""

    def test_sale_minus_payment(self, db, customer):
        """A 100.000 sale and a 40.000 payment leave 60.000 owed."""
        add_sale(db, customer, date(2024, 1, 5), "100.000")
        add_payment_in(db, customer, date(2024, 1, 10), "40.000")

        assert LedgerService(db).current_balance(customer.id) == Decimal("60.000")

    def test_return_lowers_balance(self, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "100.000")
        add_payment_in(db, customer, date(2024, 1, 10), "40.000")
        add_sale_return(db, customer, date(2024, 1, 15), "20.000")

        assert LedgerService(db).current_balance(customer.id) == Decimal("40.000")

    def test_no_events_is_zero(self, db, customer):
        assert LedgerService(db).current_balance(customer.id) == Decimal("0.000")

    def test_unknown_party_raises(self, db):
        with pytest.raises(PartyNotFound):
            LedgerService(db).current_balance(9999)

    def test_salesman_has_no_ledger(self, db, salesman):
        with pytest.raises(PartyNotFound):
            LedgerService(db).current_balance(salesman.id)

    def test_type_mismatch_raises(self, db, customer):
        with pytest.raises(PartyNotFound) as exc_info:
            LedgerService(db).current_balance(customer.id, PartyType.supplier)

        assert exc_info.value.details["party_type"] == "supplier"

    def test_supplier_balance(self, db, supplier):
        add_opening_balance(db, supplier, date(2023, 12, 31), "500.000")
        add_purchase(db, supplier, date(2024, 2, 1), "200.000")
        add_payment_out(db, supplier, date(2024, 2, 15), "300.000")
        add_purchase_return(db, supplier, date(2024, 2, 20), "25.500")

        assert LedgerService(db).current_balance(supplier.id, PartyType.supplier) == Decimal("374.500")

    def test_supplier_ignores_customer_side_rows(self, db, customer, supplier):
        add_sale(db, customer, date(2024, 1, 5), "100.000")
        add_purchase(db, supplier, date(2024, 1, 5), "30.000")

        service = LedgerService(db)
        assert service.current_balance(customer.id) == Decimal("100.000")
        assert service.current_balance(supplier.id) == Decimal("30.000")

    def test_as_of_excludes_later_rows(self, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "100.000")
        add_payment_in(db, customer, date(2024, 1, 10), "40.000")

        service = LedgerService(db)
        assert service.current_balance(customer.id, as_of=date(2024, 1, 9)) == Decimal("100.000")
        assert service.current_balance(customer.id, as_of=date(2024, 1, 10)) == Decimal("60.000")
        assert service.current_balance(customer.id, as_of=date(2023, 12, 31)) == Decimal("0.000")

    def test_future_dated_opening_balance_respects_as_of(self, db, customer):
        add_opening_balance(db, customer, date(2024, 6, 1), "50.000")

        service = LedgerService(db)
        assert service.current_balance(customer.id, as_of=date(2024, 5, 31)) == Decimal("0.000")
        assert service.current_balance(customer.id) == Decimal("50.000")

    def test_negative_balance_means_credit(self, db, customer):
        add_payment_in(db, customer, date(2024, 1, 1), "15.000")
        assert LedgerService(db).current_balance(customer.id) == Decimal("-15.000")

    def test_is_idempotent(self, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "33.333")
        add_payment_in(db, customer, date(2024, 1, 6), "11.111")

        service = LedgerService(db)
        assert service.current_balance(customer.id) == service.current_balance(customer.id)

    def test_deleted_source_row_disappears_from_balance(self, db, customer):
        sale = add_sale(db, customer, date(2024, 1, 5), "100.000")
        add_sale(db, customer, date(2024, 1, 6), "10.000")

        assert delete_sales_order(db, sale.id)
        assert LedgerService(db).current_balance(customer.id) == Decimal("10.000")


class TestBranches:
    """Branch scoping of balances and opening balances."""

    def test_branch_filter(self, db, customer, branch, other_branch):
        add_sale(db, customer, date(2024, 1, 5), "100.000", branch=branch)
        add_sale(db, customer, date(2024, 1, 5), "70.000", branch=other_branch)
        add_payment_in(db, customer, date(2024, 1, 6), "20.000", branch=branch)

        service = LedgerService(db)
        assert service.current_balance(customer.id, branch_id=branch.id) == Decimal("80.000")
        assert service.current_balance(customer.id, branch_id=other_branch.id) == Decimal("70.000")
        assert service.current_balance(customer.id) == Decimal("150.000")

    def test_opening_balances_add_up_across_branches(self, db, supplier, branch, other_branch):
        add_opening_balance(db, supplier, date(2023, 12, 1), "100.000", branch=branch)
        add_opening_balance(db, supplier, date(2023, 12, 15), "-30.000", branch=other_branch)

        service = LedgerService(db)
        assert service.current_balance(supplier.id) == Decimal("70.000")
        assert service.current_balance(supplier.id, branch_id=other_branch.id) == Decimal("-30.000")

        statement = service.statement(supplier.id)
        assert [line.entry.kind for line in statement.lines] == [
            LedgerKind.OPENING_BALANCE, LedgerKind.OPENING_BALANCE,
        ]
        assert [line.entry.date for line in statement.lines] == [date(2023, 12, 1), date(2023, 12, 15)]
        assert [line.running_balance for line in statement.lines] == [Decimal("100.000"), Decimal("70.000")]

    def test_later_branch_opening_balance_waits_for_its_date(self, db, supplier, branch, other_branch):
        """A branch opening balance only counts from its own effective date."""
        add_opening_balance(db, supplier, date(2023, 1, 1), "100.000", branch=branch)
        add_opening_balance(db, supplier, date(2024, 6, 1), "50.000", branch=other_branch)

        service = LedgerService(db)
        as_of = date(2023, 6, 1)
        combined = service.current_balance(supplier.id, as_of=as_of)
        per_branch = (
            service.current_balance(supplier.id, as_of=as_of, branch_id=branch.id)
            + service.current_balance(supplier.id, as_of=as_of, branch_id=other_branch.id)
        )

        assert combined == Decimal("100.000")
        assert combined == per_branch
        assert service.current_balance(supplier.id) == Decimal("150.000")

    def test_later_branch_opening_balance_stays_in_statement_range(self, db, supplier, branch, other_branch):
        add_opening_balance(db, supplier, date(2023, 1, 1), "100.000", branch=branch)
        add_opening_balance(db, supplier, date(2024, 6, 1), "50.000", branch=other_branch)

        statement = LedgerService(db).statement(supplier.id, start=date(2024, 1, 1), end=date(2024, 5, 31))

        assert statement.opening_balance == Decimal("100.000")
        assert statement.closing_balance == Decimal("100.000")
        assert [line.entry.kind for line in statement.lines] == [LedgerKind.BROUGHT_FORWARD]


class TestStatement:
    """Tests for LedgerService.statement()."""

    def test_supplier_statement_with_brought_forward(self, db, supplier):
        add_opening_balance(db, supplier, date(2023, 12, 31), "500.000")
        add_purchase(db, supplier, date(2024, 2, 1), "200.000")
        add_payment_out(db, supplier, date(2024, 2, 15), "300.000")

        statement = LedgerService(db).statement(
            supplier.id, start=date(2024, 1, 1), end=date(2024, 2, 28)
        )

        kinds = [line.entry.kind for line in statement.lines]
        assert kinds == [LedgerKind.BROUGHT_FORWARD, LedgerKind.PURCHASE, LedgerKind.PAYMENT_OUT]
        assert [line.entry.signed_amount for line in statement.lines] == [
            Decimal("500.000"), Decimal("200.000"), Decimal("-300.000"),
        ]
        assert [line.running_balance for line in statement.lines] == [
            Decimal("500.000"), Decimal("700.000"), Decimal("400.000"),
        ]
        assert statement.opening_balance == Decimal("500.000")
        assert statement.closing_balance == Decimal("400.000")
        assert statement.lines[0].entry.date == date(2024, 1, 1)

    def test_invalid_range_raises(self, db, customer):
        with pytest.raises(InvalidDateRange):
            LedgerService(db).statement(customer.id, start=date(2024, 3, 1), end=date(2024, 2, 1))

    def test_invalid_range_checked_before_party(self, db):
        with pytest.raises(InvalidDateRange):
            LedgerService(db).statement(9999, start=date(2024, 3, 1), end=date(2024, 2, 1))

    def test_unknown_party_raises(self, db):
        with pytest.raises(PartyNotFound):
            LedgerService(db).statement(9999, start=date(2024, 1, 1))

    def test_single_day_range(self, db, customer):
        add_sale(db, customer, date(2024, 1, 4), "5.000")
        add_sale(db, customer, date(2024, 1, 5), "10.000")
        add_sale(db, customer, date(2024, 1, 6), "20.000")

        statement = LedgerService(db).statement(
            customer.id, start=date(2024, 1, 5), end=date(2024, 1, 5)
        )

        assert [line.entry.kind for line in statement.lines] == [LedgerKind.BROUGHT_FORWARD, LedgerKind.SALE]
        assert statement.closing_balance == Decimal("15.000")

    def test_no_brought_forward_without_earlier_rows(self, db, customer):
        add_sale(db, customer, date(2024, 2, 1), "10.000")

        statement = LedgerService(db).statement(customer.id, start=date(2024, 1, 1))

        assert [line.entry.kind for line in statement.lines] == [LedgerKind.SALE]
        assert statement.opening_balance == Decimal("0.000")

    def test_empty_statement(self, db, customer):
        statement = LedgerService(db).statement(customer.id, start=date(2024, 1, 1), end=date(2024, 1, 31))

        assert statement.lines == ()
        assert statement.opening_balance == Decimal("0.000")
        assert statement.closing_balance == Decimal("0.000")

    def test_same_day_rows_keep_creation_order(self, db, customer):
        day = date(2024, 1, 10)
        add_payment_in(db, customer, day, "5.000")
        add_sale(db, customer, day, "50.000")
        add_sale_return(db, customer, day, "2.000")

        statement = LedgerService(db).statement(customer.id)

        assert [line.entry.kind for line in statement.lines] == [
            LedgerKind.PAYMENT_IN, LedgerKind.SALE, LedgerKind.SALE_RETURN,
        ]
        assert [line.running_balance for line in statement.lines] == [
            Decimal("-5.000"), Decimal("45.000"), Decimal("43.000"),
        ]

    def test_closing_equals_balance_at_end(self, db, customer):
        add_opening_balance(db, customer, date(2023, 11, 1), "12.000")
        add_sale(db, customer, date(2023, 12, 5), "100.000")
        add_payment_in(db, customer, date(2024, 1, 10), "40.000")
        add_sale(db, customer, date(2024, 1, 20), "7.250")
        add_payment_in(db, customer, date(2024, 3, 1), "9.000")

        service = LedgerService(db)
        end = date(2024, 1, 31)
        statement = service.statement(customer.id, start=date(2024, 1, 1), end=end)

        assert statement.closing_balance == service.current_balance(customer.id, as_of=end)
        assert statement.closing_balance == Decimal("79.250")

    def test_lines_sum_to_closing(self, db, customer):
        add_sale(db, customer, date(2023, 12, 5), "100.000")
        add_payment_in(db, customer, date(2024, 1, 10), "40.000")
        add_sale_return(db, customer, date(2024, 1, 12), "3.125")

        statement = LedgerService(db).statement(customer.id, start=date(2024, 1, 1))

        total = sum((line.entry.signed_amount for line in statement.lines), Decimal("0"))
        assert total == statement.closing_balance

    def test_debit_credit_columns(self, db, customer):
        add_sale(db, customer, date(2024, 1, 5), "100.000")
        add_payment_in(db, customer, date(2024, 1, 10), "40.000")

        sale_line, payment_line = LedgerService(db).statement(customer.id).lines

        assert (sale_line.entry.debit, sale_line.entry.credit) == (Decimal("100.000"), Decimal("0.000"))
        assert (payment_line.entry.debit, payment_line.entry.credit) == (Decimal("0.000"), Decimal("40.000"))


class TestRangeBoundaries:
    """Rows on the start and end dates are in range; one day outside is not."""

    @pytest.fixture
    def history(self, db, customer):
        add_sale(db, customer, date(2024, 1, 31), "1.000")
        add_sale(db, customer, date(2024, 2, 1), "10.000")
        add_sale(db, customer, date(2024, 2, 29), "100.000")
        add_sale(db, customer, date(2024, 3, 1), "1000.000")
        return customer

    def test_start_and_end_inclusive(self, db, history):
        statement = LedgerService(db).statement(
            history.id, start=date(2024, 2, 1), end=date(2024, 2, 29)
        )

        in_range = [line for line in statement.lines if line.entry.kind == LedgerKind.SALE]
        assert [line.entry.date for line in in_range] == [date(2024, 2, 1), date(2024, 2, 29)]

    def test_day_before_start_is_brought_forward(self, db, history):
        statement = LedgerService(db).statement(
            history.id, start=date(2024, 2, 1), end=date(2024, 2, 29)
        )
        assert statement.opening_balance == Decimal("1.000")

    def test_day_after_end_is_excluded(self, db, history):
        statement = LedgerService(db).statement(
            history.id, start=date(2024, 2, 1), end=date(2024, 2, 29)
        )
        assert statement.closing_balance == Decimal("111.000")
