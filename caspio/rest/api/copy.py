"""Copy a table record, optionally overriding some of its values.

Stages, in order:
    FETCH_SOURCE_DEFINITION  table definition fetched fresh from the API
    VALIDATE_TARGET_FIELDS   single source record located, override names checked
    RECONCILE_LIST_FIELDS    once per list-typed field present on the record
    SUBMIT                   record created with the row echoed back

A failure in any stage before SUBMIT performs no write.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..core.exceptions import AmbiguousSourceError, InvalidFieldError
from ..models import FieldDefinition, Record
from ..runtime.reconciler import reconcile

if TYPE_CHECKING:
    from .records import TablesAPI

logger = logging.getLogger(__name__)


class CopyStage(str, Enum):
    FETCH_SOURCE_DEFINITION = "fetch_source_definition"
    VALIDATE_TARGET_FIELDS = "validate_target_fields"
    RECONCILE_LIST_FIELDS = "reconcile_list_fields"
    SUBMIT = "submit"


def _log_stage(table_name: str, stage: CopyStage) -> None:
    logger.debug("copy_stage", extra={"table": table_name, "stage": stage.value})


def writable_fields(definition: list[FieldDefinition]) -> dict[str, FieldDefinition]:
    """Map field name to definition for every field a create call may set."""
    return {field.name: field for field in definition if field.is_writable}


def validate_overrides(
    fields: Mapping[str, FieldDefinition], overrides: Mapping[str, Any] | None
) -> None:
    """Reject overrides that name fields a create call cannot set.

    Raises:
        InvalidFieldError: If an override names a field that is not writable
    """
    invalid = [name for name in (overrides or {}) if name not in fields]
    if invalid:
        raise InvalidFieldError(
            f"Cannot overwrite {', '.join(invalid)}: not a writable field. "
            f"Writable fields: {', '.join(fields)}",
            field_names=invalid,
        )


def prepare_copy(
    source: Record,
    fields: Mapping[str, FieldDefinition],
    overrides: Mapping[str, Any] | None = None,
) -> Record:
    """Build the payload for a copy of ``source``.

    Overrides are applied, fields that cannot be written are dropped, and
    list-typed values are converted to definition indices. List values the
    definition no longer contains are omitted rather than rejected.

    Raises:
        InvalidFieldError: If an override names a field that is not writable
    """
    overrides = dict(overrides or {})
    validate_overrides(fields, overrides)

    merged = {**source, **overrides}
    payload: Record = {}
    for name, value in merged.items():
        field = fields.get(name)
        if field is None:
            continue
        if field.is_list and value is not None:
            payload[name] = reconcile(
                field.list_definition,
                value,
                temporal=field.is_temporal_list,
            )
            continue
        payload[name] = value
    return payload


async def copy_record(
    tables: TablesAPI,
    table_name: str,
    where: str,
    overrides: Mapping[str, Any] | None = None,
) -> Record | None:
    """Copy the single record matched by ``where`` into the same table.

    Args:
        tables: Table records facade
        table_name: Table to copy within
        where: WHERE clause that must match exactly one record
        overrides: Values to use instead of the source's, by field name

    Returns:
        The created record as echoed back by the API

    Raises:
        AmbiguousSourceError: If ``where`` matches zero or several records
        InvalidFieldError: If an override is not a writable field
        TransportError: If any request fails
    """
    _log_stage(table_name, CopyStage.FETCH_SOURCE_DEFINITION)
    fields = writable_fields(await tables.definition(table_name))

    _log_stage(table_name, CopyStage.VALIDATE_TARGET_FIELDS)
    matches = await tables.get_records(table_name, {"where": where})
    if not matches:
        raise AmbiguousSourceError(
            f"No record to copy was found in '{table_name}' for WHERE clause: {where}",
            match_count=0,
        )
    if len(matches) > 1:
        raise AmbiguousSourceError(
            f"The record could not be copied because {len(matches)} records in "
            f"'{table_name}' matched the WHERE clause: {where}. Refine it so that it "
            "matches a single record.",
            match_count=len(matches),
        )
    validate_overrides(fields, overrides)

    _log_stage(table_name, CopyStage.RECONCILE_LIST_FIELDS)
    payload = prepare_copy(matches[0], fields, overrides)

    _log_stage(table_name, CopyStage.SUBMIT)
    result = await tables.create_record(table_name, payload, row=True)
    return result.created_record
