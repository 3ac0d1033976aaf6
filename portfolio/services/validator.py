"""Record validation: filter decoded JSON down to well-formed records."""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from portfolio.models.records import MODEL_FOR_KIND, Record, RecordKind
from portfolio.services.errors import FormatError

logger = logging.getLogger(__name__)


@dataclass
class RecordCheck:
    """Outcome of validating a single raw record."""

    index: int
    record: Record | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None


def _describe(exc: ValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "record"
        messages.append(f"{loc}: {err['msg']}")
    return messages


def check_record(raw: Any, kind: RecordKind, index: int = 0) -> RecordCheck:
    """Validate one raw value against the model for *kind*. Never raises."""
    if not isinstance(raw, dict):
        return RecordCheck(
            index=index,
            errors=[f"record: expected object, got {type(raw).__name__}"],
        )
    try:
        record = MODEL_FOR_KIND[kind].model_validate(raw)
    except ValidationError as exc:
        return RecordCheck(index=index, errors=_describe(exc))
    return RecordCheck(index=index, record=record)


def validate_records(data: Any, kind: RecordKind) -> list[Record]:
    """Return the well-formed records of *data*, preserving input order.

    Malformed entries are dropped (and logged) rather than failing the batch.
    Raises FormatError if *data* is not an array at all, so callers can tell
    a broken file apart from one with no usable records.
    """
    if not isinstance(data, list):
        raise FormatError(
            f"Invalid {kind} data format: expected array, got {type(data).__name__}"
        )

    valid: list[Record] = []
    for i, raw in enumerate(data):
        check = check_record(raw, kind, index=i)
        if check.ok:
            valid.append(check.record)
        else:
            logger.warning(
                "Dropping malformed %s record #%d: %s", kind, i, "; ".join(check.errors)
            )
    return valid
