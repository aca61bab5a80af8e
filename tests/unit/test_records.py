"""Unit tests for parsing vault rows into user records"""

import pytest
from decimal import Decimal

from vault_gateway.domain.exceptions import MalformedResponseError
from vault_gateway.domain.models import RecordDefaults
from vault_gateway.domain.records import parse_collection, parse_record, split_history, stringify


def test_parse_record_maps_sheet_columns(sample_rows):
    record = parse_record(sample_rows[0], RecordDefaults())

    assert record.username == "alice"
    assert record.secret == 1234  # raw value kept for the verifier
    assert record.full_name == "Alice A"
    assert record.account_number == "100200300"
    assert record.balance == Decimal("500")
    assert record.credit_score == "742"
    assert record.transaction_history == ("Salary +3000", "Rent -1500")


def test_parse_record_applies_fallbacks_for_missing_columns():
    record = parse_record({"username": "ghost", "password": "x"}, RecordDefaults())

    assert record.full_name == ""
    assert record.account_type == ""
    assert record.balance == Decimal("0")
    assert record.currency == "USD"
    assert record.credit_score == "700"
    assert record.account_status == "Active"
    assert record.transaction_history == ()


def test_parse_record_fallbacks_are_configurable():
    defaults = RecordDefaults(currency="AED", credit_score="650", account_status="Pending")
    record = parse_record({"username": "x", "creditScore": "", "accountStatus": None}, defaults)

    assert record.currency == "AED"
    assert record.credit_score == "650"
    assert record.account_status == "Pending"


def test_parse_record_zero_credit_score_uses_fallback():
    """Falsy cells fall back, matching the deployed dashboard"""
    record = parse_record({"username": "x", "creditScore": 0}, RecordDefaults())
    assert record.credit_score == "700"


def test_parse_record_balance_with_thousands_separator():
    record = parse_record({"username": "x", "balance": "1,250.75"}, RecordDefaults())
    assert record.balance == Decimal("1250.75")


@pytest.mark.parametrize("balance", ["N/A", "lots", "NaN", "Infinity", "-inf", True])
def test_parse_record_unusable_balance_falls_back_to_zero(balance):
    record = parse_record({"username": "x", "balance": balance}, RecordDefaults())
    assert record.balance == Decimal("0")


def test_parse_record_keeps_huge_balance():
    record = parse_record({"username": "x", "balance": "1e30"}, RecordDefaults())
    assert record.balance == Decimal("1e30")


def test_parse_collection_bad_balance_in_other_row_does_not_fail(sample_rows):
    sample_rows[1]["balance"] = "N/A"

    records = parse_collection({"userDatabase": sample_rows}, "userDatabase", RecordDefaults())

    assert records[0].balance == Decimal("500")
    assert records[1].balance == Decimal("0")


def test_parse_record_rejects_non_object_row():
    with pytest.raises(MalformedResponseError):
        parse_record(["alice", "1234"], RecordDefaults())


def test_split_history_drops_empty_entries():
    assert split_history(" Deposit +10 ;; Fee -1 ; ") == ("Deposit +10", "Fee -1")
    assert split_history("") == ()
    assert split_history(None) == ()


def test_stringify_matches_browser_tostring():
    assert stringify(1234) == "1234"
    assert stringify(1234.0) == "1234"
    assert stringify(12.5) == "12.5"
    assert stringify(True) == "true"
    assert stringify(None) == ""
    assert stringify(" a ") == " a "


def test_parse_collection_preserves_order(sample_rows):
    records = parse_collection({"userDatabase": sample_rows}, "userDatabase", RecordDefaults())
    assert [r.username for r in records] == ["alice", "bob"]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"users": []},
        {"userDatabase": {"username": "alice"}},
        {"userDatabase": "alice"},
    ],
)
def test_parse_collection_rejects_unexpected_shapes(payload):
    with pytest.raises(MalformedResponseError):
        parse_collection(payload, "userDatabase", RecordDefaults())


def test_parse_collection_accepts_empty_list():
    assert parse_collection({"userDatabase": []}, "userDatabase", RecordDefaults()) == []
