from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Generic, Optional, Protocol, Sequence, TypeVar

from ..common.validators import missing_fields
from ..core.exceptions import InvalidRecordError, ValidationError
from .result import BatchResult, OperationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UpsertStore(Protocol[T]):
    def upsert_many(self, records: Sequence[T], *, key_fields: Sequence[str]) -> Sequence[OperationResult]:
        """Run one update-or-insert per record, in order.

        A record whose natural key already exists has all its fields replaced.
        Operations are independent; a store that can tell a single operation
        failed reports it as FAILED and carries on. Anything else (connection
        lost, store unreachable) is raised unchanged.
        """

        raise NotImplementedError


def natural_key_of(record: Any, key_fields: Sequence[str]) -> tuple:
    if isinstance(record, Mapping):
        return tuple(record.get(f) for f in key_fields)
    return tuple(getattr(record, f) for f in key_fields)


class BulkUpsertCoordinator(Generic[T]):
    """Turns a raw batch submission into keyed update-or-insert operations.

    Every record is checked and converted before the first write: a batch with
    one bad record writes nothing and raises InvalidRecordError describing the
    first offender.
    """

    def __init__(
        self,
        store: UpsertStore[T],
        *,
        natural_key: Sequence[str],
        required_fields: Sequence[str],
        build: Callable[[Mapping[str, Any]], T],
        aliases: Optional[Mapping[str, str]] = None,
        label: str = "record",
    ):
        if not natural_key:
            raise ValueError("natural_key must name at least one field")
        self._store = store
        self._natural_key = tuple(natural_key)
        self._required = tuple(required_fields)
        self._build = build
        self._aliases = dict(aliases or {})
        self._label = label

    @property
    def natural_key(self) -> tuple[str, ...]:
        return self._natural_key

    def _canonical(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        data = dict(raw)
        for alias, name in self._aliases.items():
            if alias in data and (name not in data or data[name] in (None, "")):
                data[name] = data.pop(alias)
        return data

    def validate(self, payload: Any) -> list[T]:
        if not isinstance(payload, (list, tuple)):
            raise ValidationError(f"Invalid {self._label} data format")

        records: list[T] = []
        for index, raw in enumerate(payload):
            if not isinstance(raw, Mapping):
                raise InvalidRecordError(f"{self._label.capitalize()} {index} is not an object", index=index, record=None)

            data = self._canonical(raw)
            missing = missing_fields(data, self._required)
            if missing:
                raise InvalidRecordError(
                    f"Missing required fields in {self._label} record {index}: {', '.join(missing)}",
                    index=index,
                    record=raw,
                )

            try:
                records.append(self._build(data))
            except (ValueError, TypeError, ValidationError) as e:
                raise InvalidRecordError(f"Invalid {self._label} record {index}: {e}", index=index, record=raw) from e

        return records

    def upsert_batch(self, payload: Any) -> BatchResult:
        try:
            records = self.validate(payload)
        except InvalidRecordError as e:
            logger.warning("Rejected %s batch at index %s: %s", self._label, e.index, e)
            raise

        if not records:
            return BatchResult()

        results = self._store.upsert_many(records, key_fields=self._natural_key)
        batch = BatchResult(operations=tuple(results))
        logger.info(
            "%s batch of %d: upserted=%d modified=%d matched=%d failed=%d",
            self._label.capitalize(),
            batch.total,
            batch.upserted_count,
            batch.modified_count,
            batch.matched_count,
            batch.failed_count,
        )
        return batch
