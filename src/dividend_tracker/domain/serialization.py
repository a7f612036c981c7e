"""JSON record codec for snapshots and lots.

Records use the camelCase keys of the portfolio file format (``asOf``,
``averageCost``, ``amountPerShare``, ``customLots`` ...). The ``normalize_*``
readers return None for malformed entries instead of raising; callers decide
whether a dropped entry is fatal. Lot trade dates and dividend dates must be
ISO-8601; any other date string makes the entry malformed.
"""

import json
from decimal import Decimal
from typing import Any, Optional

from dividend_tracker.core.timezone import is_iso_date
from dividend_tracker.domain.models import (
    DividendPayment,
    EquityPosition,
    NavPoint,
    PortfolioSnapshot,
    PurchaseLot,
    to_decimal,
)


def is_number(value: Any) -> bool:
    """Return True for JSON numbers (booleans excluded)."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(data: Any) -> str:
    """Serialize a record to JSON text."""
    return json.dumps(data, default=_json_default)


def decode_json(raw: str) -> Any:
    """Parse JSON text, decoding floats as Decimal."""
    return json.loads(raw, parse_float=Decimal)


# Dividends and NAV points


def dividend_to_dict(dividend: DividendPayment) -> dict[str, Any]:
    return {
        "id": dividend.id,
        "date": dividend.date,
        "amountPerShare": dividend.amount_per_share,
    }


def normalize_dividend_payment(value: Any) -> Optional[DividendPayment]:
    """Read a dividend, accepting the legacy ``amount`` key."""
    if not isinstance(value, dict):
        return None
    amount = value.get("amountPerShare")
    if not is_number(amount):
        amount = value.get("amount")
    if not is_number(amount):
        return None
    if not isinstance(value.get("id"), str) or not isinstance(value.get("date"), str):
        return None
    if not is_iso_date(value["date"]):
        return None
    return DividendPayment(id=value["id"], date=value["date"], amount_per_share=to_decimal(amount))


def nav_point_to_dict(point: NavPoint) -> dict[str, Any]:
    return {"date": point.date, "value": point.value}


def normalize_nav_point(value: Any) -> Optional[NavPoint]:
    if not isinstance(value, dict):
        return None
    if isinstance(value.get("date"), str) and is_number(value.get("value")):
        return NavPoint(date=value["date"], value=to_decimal(value["value"]))
    return None


# Equities


def equity_to_dict(equity: EquityPosition) -> dict[str, Any]:
    return {
        "symbol": equity.symbol,
        "name": equity.name,
        "sector": equity.sector,
        "shares": equity.shares,
        "averageCost": equity.average_cost,
        "currentPrice": equity.current_price,
        "dividends": [dividend_to_dict(d) for d in equity.dividends],
        "navHistory": [nav_point_to_dict(p) for p in equity.nav_history],
    }


def normalize_equity_position(value: Any) -> Optional[EquityPosition]:
    """
    Read an equity record.

    The identifying and numeric fields are required; malformed dividends and
    NAV points are dropped individually.
    """
    if not isinstance(value, dict):
        return None
    for key in ("symbol", "name", "sector"):
        if not isinstance(value.get(key), str):
            return None
    for key in ("shares", "averageCost", "currentPrice"):
        if not is_number(value.get(key)):
            return None

    raw_dividends = value.get("dividends")
    dividends = []
    if isinstance(raw_dividends, list):
        dividends = [d for d in map(normalize_dividend_payment, raw_dividends) if d is not None]

    raw_nav = value.get("navHistory")
    nav_history = []
    if isinstance(raw_nav, list):
        nav_history = [p for p in map(normalize_nav_point, raw_nav) if p is not None]

    return EquityPosition(
        symbol=value["symbol"],
        name=value["name"],
        sector=value["sector"],
        shares=to_decimal(value["shares"]),
        average_cost=to_decimal(value["averageCost"]),
        current_price=to_decimal(value["currentPrice"]),
        dividends=dividends,
        nav_history=nav_history,
    )


# Lots


def lot_to_dict(lot: PurchaseLot) -> dict[str, Any]:
    return {
        "id": lot.id,
        "symbol": lot.symbol,
        "tradeDate": lot.trade_date,
        "shares": lot.shares,
        "pricePerShare": lot.price_per_share,
    }


def normalize_purchase_lot(value: Any) -> Optional[PurchaseLot]:
    if not isinstance(value, dict):
        return None
    for key in ("id", "symbol", "tradeDate"):
        if not isinstance(value.get(key), str):
            return None
    for key in ("shares", "pricePerShare"):
        if not is_number(value.get(key)):
            return None
    if not is_iso_date(value["tradeDate"]):
        return None
    return PurchaseLot(
        id=value["id"],
        symbol=value["symbol"],
        trade_date=value["tradeDate"],
        shares=to_decimal(value["shares"]),
        price_per_share=to_decimal(value["pricePerShare"]),
    )


def parse_lots(data: Any) -> list[PurchaseLot]:
    """Read a list of lots, dropping malformed entries."""
    if not isinstance(data, list):
        return []
    return [lot for lot in map(normalize_purchase_lot, data) if lot is not None]


# Snapshots


def snapshot_to_dict(snapshot: PortfolioSnapshot) -> dict[str, Any]:
    data: dict[str, Any] = {
        "asOf": snapshot.as_of,
        "equities": [equity_to_dict(e) for e in snapshot.equities],
    }
    optional = {
        "cashPosition": snapshot.cash_position,
        "lastPriceUpdate": snapshot.last_price_update,
        "lastDividendUpdate": snapshot.last_dividend_update,
        "seedAmount": snapshot.seed_amount,
        "seedDate": snapshot.seed_date,
    }
    data.update({key: value for key, value in optional.items() if value is not None})
    return data


def read_snapshot_extras(data: dict[str, Any]) -> dict[str, Any]:
    """Return the optional snapshot fields that are well-typed in ``data``."""
    extras: dict[str, Any] = {}
    if is_number(data.get("cashPosition")):
        extras["cash_position"] = to_decimal(data["cashPosition"])
    if is_number(data.get("seedAmount")):
        extras["seed_amount"] = to_decimal(data["seedAmount"])
    for key, attr in (
        ("seedDate", "seed_date"),
        ("lastPriceUpdate", "last_price_update"),
        ("lastDividendUpdate", "last_dividend_update"),
    ):
        if isinstance(data.get(key), str):
            extras[attr] = data[key]
    return extras


def parse_stored_snapshot(data: Any) -> Optional[PortfolioSnapshot]:
    """Read a persisted snapshot; malformed equities are dropped."""
    if not isinstance(data, dict):
        return None
    if not isinstance(data.get("asOf"), str) or not isinstance(data.get("equities"), list):
        return None
    equities = [e for e in map(normalize_equity_position, data["equities"]) if e is not None]
    return PortfolioSnapshot(as_of=data["asOf"], equities=equities, **read_snapshot_extras(data))

