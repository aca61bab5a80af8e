"""Parsing of raw record-store rows into UserRecord values"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Tuple

from vault_gateway.domain.exceptions import MalformedResponseError
from vault_gateway.domain.models import RecordCollection, RecordDefaults, UserRecord

logger = logging.getLogger(__name__)


def stringify(value: Any) -> str:
    """
    Render a sheet cell the way the browser client did with toString().

    Integral floats lose their trailing ".0" and booleans are lower-case,
    so a cell holding 1234 compares equal to the typed string "1234".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def split_history(raw: Any) -> Tuple[str, ...]:
    """Split the semicolon-delimited ledger column into trimmed entries"""
    if not raw:
        return ()
    entries = (item.strip() for item in stringify(raw).split(";"))
    return tuple(item for item in entries if item)


def _parse_balance(raw: Any) -> Decimal:
    """Numeric balance, or zero for empty, non-numeric or non-finite cells"""
    if raw is None or raw == "" or isinstance(raw, bool):
        return Decimal("0")
    try:
        balance = Decimal(str(raw).replace(",", "").strip())
    except InvalidOperation:
        logger.warning("Unusable balance value %r, falling back to 0", raw)
        return Decimal("0")
    if not balance.is_finite():
        logger.warning("Non-finite balance value %r, falling back to 0", raw)
        return Decimal("0")
    return balance


def parse_record(row: Dict[str, Any], defaults: RecordDefaults) -> UserRecord:
    """
    Build a UserRecord from one Sheety row (camelCase column names).

    Missing columns fall back to empty strings, zero balance, or the configured
    defaults. Credit score and status use the fallback for any falsy cell.
    """
    if not isinstance(row, dict):
        raise MalformedResponseError(f"Record entry is not an object: {type(row).__name__}")

    return UserRecord(
        username=stringify(row.get("username")),
        secret=row.get("password"),
        full_name=stringify(row.get("fullName")),
        account_type=stringify(row.get("accountType")),
        account_number=stringify(row.get("accountNumber")),
        balance=_parse_balance(row.get("balance")),
        currency=stringify(row.get("currency")).strip() or defaults.currency,
        credit_score=stringify(row.get("creditScore")) if row.get("creditScore") else defaults.credit_score,
        account_status=stringify(row.get("accountStatus")) if row.get("accountStatus") else defaults.account_status,
        transaction_history=split_history(row.get("transactionHistory")),
    )


def parse_collection(payload: Any, collection_field: str, defaults: RecordDefaults) -> RecordCollection:
    """
    Extract the record collection from a record-store response body.

    Raises:
        MalformedResponseError: If the body is not an object, the collection
            field is missing or not a list, or any row is unusable
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError("Record store response is not a JSON object")
    if collection_field not in payload:
        raise MalformedResponseError(f"Record store response has no '{collection_field}' field")

    rows = payload[collection_field]
    if not isinstance(rows, list):
        raise MalformedResponseError(f"'{collection_field}' is not a list")

    records: List[UserRecord] = [parse_record(row, defaults) for row in rows]
    return records
