"""WHERE-clause builder for the date-windowed list queries."""

from datetime import datetime
from typing import Any

from repairshop.core.clock import as_local_naive


def date_window(
    alias: str,
    column: str,
    since: datetime | None,
    until: datetime | None,
    customer_id: int | None = None,
    product_id: int | None = None,
) -> tuple[str, list[Any]]:
    """Return ``(" WHERE ...", params)``, or ``("", [])`` when unfiltered.

    ``since`` is inclusive and ``until`` exclusive, so adjacent windows never
    count a row twice. Bounds with an offset are compared in local time, the
    same way stored timestamps are written.
    """
    clauses: list[str] = []
    params: list[Any] = []
    if customer_id is not None:
        clauses.append(f"{alias}.customer_id = ?")
        params.append(customer_id)
    if product_id is not None:
        clauses.append(f"{alias}.product_id = ?")
        params.append(product_id)
    if since is not None:
        clauses.append(f"{alias}.{column} >= ?")
        params.append(as_local_naive(since).isoformat())
    if until is not None:
        clauses.append(f"{alias}.{column} < ?")
        params.append(as_local_naive(until).isoformat())
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params
