"""
DualStreamCursor - Walks the truth and DAQ stores in lockstep.

Single responsibility: Pair entry i of one store with entry i of the other.
The two trees share no join key; position is the only link between them.
"""

import logging
from typing import Iterator

from services.input.record_store import RecordStore


class DualStreamCursor:
    """
    Iterates two record stores by shared event index.

    Covers min(count_truth, count_daq) events. A count mismatch is reported
    once as a warning and never aborts the run.
    """

    def __init__(self, truth_store: RecordStore, daq_store: RecordStore):
        """
        Initialize cursor.

        Args:
            truth_store: Store decoding TruthRecord entries
            daq_store: Store decoding lists of DAQRecord entries
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.truth_store = truth_store
        self.daq_store = daq_store

        self.truth_entries = truth_store.count()
        self.daq_entries = daq_store.count()

        if self.mismatched:
            self.logger.warning(
                f"Different number of entries in trees "
                f"(DAQ: {self.daq_entries}, truth: {self.truth_entries}); "
                f"processing the first {self.n_events}"
            )

    @property
    def n_events(self) -> int:
        """Number of events the cursor will visit."""
        return min(self.truth_entries, self.daq_entries)

    @property
    def mismatched(self) -> bool:
        """True if the two stores hold different entry counts."""
        return self.truth_entries != self.daq_entries

    def __len__(self) -> int:
        return self.n_events

    def __iter__(self) -> Iterator[tuple]:
        """
        Yield (index, truth_record, daq_records) in index order.

        Each record is decoded fresh for its index.
        """
        for index in range(self.n_events):
            truth_record = self.truth_store.decode(index)
            daq_records = self.daq_store.decode(index)
            yield index, truth_record, daq_records
