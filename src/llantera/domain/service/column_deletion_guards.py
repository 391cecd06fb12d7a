"""Guards that decide whether a price column may be deleted.

The guards run in a fixed order and the first failure wins:

1. ``refuse_list_column``: the list price column is permanent.
2. ``refuse_base_of_derived``: deleting a base would orphan a derivation.
3. ``require_price_level_transfer``: price levels that show the column
   need a valid replacement column.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from llantera.domain.model.price_column import PriceColumn, normalize_code
from llantera.domain.model.price_level import PriceLevel


@dataclass
class ColumnDeletion:
    """Everything the guards need to judge one deletion request."""

    column: PriceColumn
    columns: list[PriceColumn]
    price_levels: list[PriceLevel]
    transfer_to_code: str | None = None
    affected_levels: list[PriceLevel] = field(default_factory=list)
    transfer_target: PriceColumn | None = None


Guard = Callable[[ColumnDeletion], "str | None"]


def refuse_list_column(request: ColumnDeletion) -> str | None:
    if request.column.is_list_price:
        return "The list price column cannot be deleted"
    return None


def refuse_base_of_derived(request: ColumnDeletion) -> str | None:
    code = request.column.code
    for other in request.columns:
        if other.id == request.column.id or not other.is_derived:
            continue
        if normalize_code(other.base_code) == code:
            return (
                f"Column '{code}' cannot be deleted because it is the base "
                f"of derived column '{other.code}'"
            )
    return None


def require_price_level_transfer(request: ColumnDeletion) -> str | None:
    """Record the levels to rewrite and the column they move to."""
    code = request.column.code
    request.affected_levels = [lvl for lvl in request.price_levels if lvl.uses_column(code)]
    if not request.affected_levels:
        return None

    target_code = normalize_code(request.transfer_to_code)
    if not target_code:
        return (
            f"Column '{code}' is used by price levels; "
            "a destination column (transfer_to_code) is required"
        )
    if target_code == code:
        return "The destination column must differ from the column being deleted"

    for candidate in request.columns:
        if candidate.code == target_code:
            request.transfer_target = candidate
            return None
    return f"Destination column '{target_code}' does not exist"


DELETION_GUARDS: tuple[Guard, ...] = (
    refuse_list_column,
    refuse_base_of_derived,
    require_price_level_transfer,
)


def first_deletion_failure(
    request: ColumnDeletion,
    guards: tuple[Guard, ...] = DELETION_GUARDS,
) -> str | None:
    """Run *guards* in order and return the first failure message."""
    for guard in guards:
        failure = guard(request)
        if failure is not None:
            return failure
    return None
