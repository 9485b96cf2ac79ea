from __future__ import annotations

from typing import Iterable, Optional

from app.errors import NotFoundError
from app.metrics import amount_due, format_amount, payment_status_badge
from app.search import filter_members
from app.subscription import change_subscription_type


class MemberWorkingSet:
    """
    The member records a view currently holds (list, dashboard, payments).

    Owned by the calling view; every derived value is recomputed from the
    records on each call. Records are the dicts produced by
    app.records.member_to_record.
    """

    def __init__(self, records: Iterable[dict] = ()):
        self._records: list[dict] = [dict(r) for r in records]

    @property
    def members(self) -> list[dict]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def _index_of(self, member_id) -> int:
        for index, record in enumerate(self._records):
            if record.get("id") == member_id:
                return index
        raise NotFoundError("Member not found")

    def get(self, member_id) -> Optional[dict]:
        try:
            return self._records[self._index_of(member_id)]
        except NotFoundError:
            return None

    def search(self, query: str | None) -> list[dict]:
        return list(filter_members(self._records, query))

    def replace(self, record: dict) -> None:
        self._records[self._index_of(record.get("id"))] = dict(record)

    def remove(self, member_id) -> dict:
        return self._records.pop(self._index_of(member_id))

    def change_subscription(self, member_id, new_type: str) -> dict:
        """
        Recompute the end date from the stored start date for the new plan
        and reflect it in the set. Returns the updated record for the caller
        to persist.
        """
        index = self._index_of(member_id)
        updated = change_subscription_type(self._records[index], new_type)
        self._records[index] = updated
        return updated

    def pending_payments(self) -> list[dict]:
        rows = []
        for record in self._records:
            if record.get("payment_status") == "paid":
                continue
            due = amount_due(record["subscription_type"])
            rows.append(
                {
                    "id": record.get("id"),
                    "unique_id": record.get("unique_id"),
                    "name": record.get("name"),
                    "subscription_type": record.get("subscription_type"),
                    "subscription_end": record.get("subscription_end"),
                    "payment_status": payment_status_badge(record.get("payment_status")),
                    "amount_due": format_amount(due),
                }
            )
        return rows
