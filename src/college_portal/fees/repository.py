from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FeeRecord


class FeeRepository(Protocol):
    def list_all(self) -> Sequence[FeeRecord]:
        """Newest first."""

        raise NotImplementedError

    def list_for_student(self, student_key: str) -> Sequence[FeeRecord]:
        raise NotImplementedError

    def get(self, fee_id: int) -> Optional[FeeRecord]:
        raise NotImplementedError

    def create(self, fee: FeeRecord) -> int:
        raise NotImplementedError

    def update(self, fee_id: int, fee: FeeRecord) -> None:
        raise NotImplementedError

    def delete(self, fee_id: int) -> bool:
        raise NotImplementedError
