from __future__ import annotations

from datetime import datetime

from .types import AttributePlan, ParsedDate


def _local_naive(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts
    return ts.astimezone().replace(tzinfo=None)


def plan(parsed: ParsedDate, current_modification: datetime | None = None) -> AttributePlan:
    """Decide which timestamps to write for a file whose name carries `parsed`.

    Creation always takes the filename date. Modification only moves forward: it is set when
    the file has none, or when the filename date is strictly later than the current one.
    """

    at = parsed.at
    if current_modification is None or at > _local_naive(current_modification):
        return AttributePlan(creation=at, modification=at)
    return AttributePlan(creation=at)
