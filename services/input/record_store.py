"""
RecordStore - Random-access source of decoded event records.

Single responsibility: Expose an entry count and decode one entry by index.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence


class RecordStore(ABC):
    """
    Base class for record stores.

    A store is addressed by a zero-based integer event index and never
    mutated by its readers.
    """

    @abstractmethod
    def count(self) -> int:
        """Number of entries in the store."""
        pass

    @abstractmethod
    def decode(self, index: int) -> Any:
        """
        Decode one entry.

        Args:
            index: Entry index in [0, count())

        Returns:
            A freshly built record for this entry

        Raises:
            IndexError: If index is out of range
        """
        pass

    def _check_index(self, index: int):
        if index < 0 or index >= self.count():
            raise IndexError(f"entry {index} out of range [0, {self.count()})")


class SequenceRecordStore(RecordStore):
    """Record store over records already held in memory."""

    def __init__(self, records: Sequence[Any]):
        self._records = list(records)

    def count(self) -> int:
        return len(self._records)

    def decode(self, index: int) -> Any:
        self._check_index(index)
        return self._records[index]
