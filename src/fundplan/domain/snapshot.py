"""Conversion between plan snapshots and their document form.

The document form is the shape the planning app stores remotely::

    {
        "exchangeRate": 32,
        "accounts": [{"id", "name", "currency", "amount"}],
        "groups": [{"id", "name", "color", "percentage", "parentId"}],
        "investments": [{"id", "name", "percentage", "accountPriority",
                         "groupId", "dcaType", "customDcaValue",
                         "customDcaUnit", "dcaStartDate", "dcaEndDate",
                         "dcaHistory": [{"date", "completed"}]}],
    }

Loading is lenient: non-numeric or negative amounts become 0 and
unparseable optional dates are dropped.
"""

import logging
from typing import Any, Optional

from fundplan.domain.constants import (
    BASE_CURRENCY,
    DEFAULT_EXCHANGE_RATE,
    DEFAULT_GROUP_COLOR,
    DEFAULT_GROUP_PERCENTAGE,
)
from fundplan.domain.currency import validate_exchange_rate
from fundplan.domain.entities import (
    Account,
    CompletionEntry,
    Group,
    Investment,
    PlanSnapshot,
    Recurrence,
    RecurrenceType,
    RecurrenceUnit,
)
from fundplan.utils.amount_parser import coerce_amount
from fundplan.utils.date_parser import to_calendar_date

logger = logging.getLogger(__name__)


def _optional_date(value):
    if value in (None, ""):
        return None
    try:
        return to_calendar_date(value)
    except ValueError:
        logger.warning("Ignoring unparseable date %r", value)
        return None


def _optional_int(value) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _enum_or_default(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _recurrence_from_dict(data: dict[str, Any]) -> Recurrence:
    rtype = _enum_or_default(RecurrenceType, data.get("dcaType"), RecurrenceType.MONTHLY)
    unit = _enum_or_default(RecurrenceUnit, data.get("customDcaUnit"), None)
    return Recurrence(
        type=rtype,
        custom_value=_optional_int(data.get("customDcaValue")),
        custom_unit=unit,
    )


def snapshot_from_dict(data: dict[str, Any]) -> PlanSnapshot:
    """Build a PlanSnapshot from its document form."""
    rate = data.get("exchangeRate")
    exchange_rate = DEFAULT_EXCHANGE_RATE if rate is None else validate_exchange_rate(rate)

    accounts = tuple(
        Account(
            id=int(acc["id"]),
            name=str(acc.get("name", "")),
            currency=acc.get("currency") or BASE_CURRENCY,
            balance=coerce_amount(acc.get("amount")),
        )
        for acc in data.get("accounts") or []
    )

    groups = tuple(
        Group(
            id=int(grp["id"]),
            name=str(grp.get("name", "")),
            percentage=(
                DEFAULT_GROUP_PERCENTAGE
                if grp.get("percentage") is None
                else coerce_amount(grp.get("percentage"))
            ),
            parent_id=_optional_int(grp.get("parentId")),
            color=grp.get("color") or DEFAULT_GROUP_COLOR,
        )
        for grp in data.get("groups") or []
    )

    investments = []
    for position, inv in enumerate(data.get("investments") or []):
        history = []
        for entry in inv.get("dcaHistory") or []:
            day = _optional_date(entry.get("date"))
            if day is not None:
                history.append(CompletionEntry(date=day, completed=bool(entry.get("completed"))))
        priority = tuple(
            account_id
            for account_id in (_optional_int(a) for a in inv.get("accountPriority") or [])
            if account_id is not None
        )
        investments.append(
            Investment(
                id=int(inv["id"]),
                name=str(inv.get("name", "")),
                percentage=coerce_amount(inv.get("percentage")),
                account_priority=priority,
                group_id=_optional_int(inv.get("groupId")),
                recurrence=_recurrence_from_dict(inv),
                start_date=_optional_date(inv.get("dcaStartDate")),
                end_date=_optional_date(inv.get("dcaEndDate")),
                history=tuple(history),
                position=position,
            )
        )

    return PlanSnapshot(
        exchange_rate=exchange_rate,
        accounts=accounts,
        groups=groups,
        investments=tuple(investments),
    )


def snapshot_to_dict(snapshot: PlanSnapshot) -> dict[str, Any]:
    """Render a PlanSnapshot in its document form (JSON-compatible)."""
    return {
        "exchangeRate": float(snapshot.exchange_rate),
        "accounts": [
            {
                "id": acc.id,
                "name": acc.name,
                "currency": acc.currency,
                "amount": float(acc.balance),
            }
            for acc in snapshot.accounts
        ],
        "groups": [
            {
                "id": grp.id,
                "name": grp.name,
                "color": grp.color,
                "percentage": float(grp.percentage),
                "parentId": grp.parent_id,
            }
            for grp in snapshot.groups
        ],
        "investments": [
            {
                "id": inv.id,
                "name": inv.name,
                "percentage": float(inv.percentage),
                "accountPriority": list(inv.account_priority),
                "groupId": inv.group_id,
                "dcaType": RecurrenceType(inv.recurrence.type).value,
                "customDcaValue": inv.recurrence.custom_value,
                "customDcaUnit": (
                    RecurrenceUnit(inv.recurrence.custom_unit).value
                    if inv.recurrence.custom_unit is not None
                    else None
                ),
                "dcaStartDate": inv.start_date.isoformat() if inv.start_date else None,
                "dcaEndDate": inv.end_date.isoformat() if inv.end_date else None,
                "dcaHistory": [
                    {"date": entry.date.isoformat(), "completed": entry.completed}
                    for entry in inv.history
                ],
            }
            for inv in snapshot.investments
        ],
    }
