"""List-field index reconciliation.

List-typed fields (``LIST-STRING``, ``LIST-NUMBER``, ``LIST-DATE/TIME``) are
written as lists of indices into the field's definition, not as values. The
backend keeps an index for a value's whole history: removing a value frees
nothing, and re-adding the same text brings back the original index. Guessing
indices therefore either corrupts unrelated entries or gets the write
rejected, so values are always resolved against the live definition.

Architecture:
    reconcile() builds a reverse map from the definition it is given on every
    call and never caches it. Values missing from the definition are dropped;
    assigning indices to new values is left to the backend.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from ..models.fields import ListFieldDefinition

logger = logging.getLogger(__name__)


def to_epoch_millis(value: Any) -> int | None:
    """Convert a date/time list value to epoch milliseconds.

    Strings are parsed as ISO 8601 (``Z`` suffix accepted); naive values are
    taken as UTC. Numbers are taken as epoch milliseconds already.

    Returns:
        Milliseconds since the epoch, or None if the value cannot be parsed
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)


def reverse_index(definition: ListFieldDefinition, *, temporal: bool = False) -> dict[Any, int]:
    """Build the value-to-index map for a list definition.

    Temporal definitions are keyed by epoch milliseconds because one instant
    has many textual encodings. If a value appears twice the later index wins.
    """
    reverse: dict[Any, int] = {}
    for index, value in definition.items():
        key = to_epoch_millis(value) if temporal else value
        if key is None:
            continue
        reverse[key] = index
    return reverse


def reconcile(
    definition: ListFieldDefinition,
    desired_values: Iterable[Any] | Mapping[Any, Any],
    *,
    temporal: bool = False,
) -> list[int]:
    """Translate desired list values into the indices the write API expects.

    Args:
        definition: Live list definition of the target field
        desired_values: Values to submit, in order. A mapping (as read back
            from a record) contributes its values.
        temporal: Compare values as instants (``LIST-DATE/TIME`` fields)

    Returns:
        Indices in the order of ``desired_values``; values absent from the
        definition are omitted

    Example:
        >>> definition = ListFieldDefinition.from_wire({"1": "Cat", "4": "Frog", "6": "Mouse"})
        >>> reconcile(definition, ["Cat", "Dog", "Frog"])
        [1, 4]
    """
    if isinstance(desired_values, Mapping):
        desired_values = desired_values.values()

    reverse = reverse_index(definition, temporal=temporal)
    indices: list[int] = []
    dropped: list[Any] = []
    for value in desired_values:
        key = to_epoch_millis(value) if temporal else value
        if key is not None and key in reverse:
            indices.append(int(reverse[key]))
        else:
            dropped.append(value)

    if dropped:
        logger.debug(
            "list_values_dropped",
            extra={"dropped_values": dropped, "resolved_count": len(indices)},
        )
    return indices
