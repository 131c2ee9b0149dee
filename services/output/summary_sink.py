"""
Summary record sinks - Persist one flat record per event.

RootSummarySink writes the records to a ROOT TTree with uproot.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import awkward as ak
import numpy as np
import uproot

from domain.output import OutputRecord, VOLUME_BRANCH_PREFIX


class SummaryRecordSink(ABC):
    """
    Base class for append-only summary sinks.

    Records must be appended in event index order. Usable as a context
    manager: entering opens the sink, leaving closes it.
    """

    @abstractmethod
    def open(self):
        """Create the output and declare its schema."""
        pass

    @abstractmethod
    def append(self, record: OutputRecord):
        """Queue one record for writing."""
        pass

    @abstractmethod
    def flush(self):
        """Write every queued record."""
        pass

    @abstractmethod
    def close(self):
        """Flush and release the output."""
        pass

    @abstractmethod
    def count_written(self) -> int:
        """Number of records appended so far."""
        pass

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class RootSummarySink(SummaryRecordSink):
    """
    Writes OutputRecords to a TTree.

    The branch list is fixed at open(): the fixed event columns plus one
    float column per volume name, named ``<prefix><volume>``. Records are
    buffered and written as one basket every ``basket_size`` records.
    """

    def __init__(
        self,
        output_path: str,
        volume_names: list[str],
        tree_name: str = "EdepInfo",
        title: str = "Flattened Energy Deposition Information",
        basket_size: int = 1000,
        volume_prefix: str = VOLUME_BRANCH_PREFIX
    ):
        """
        Initialize sink.

        Args:
            output_path: ROOT file to create (overwritten if present)
            volume_names: Volume names in output column order
            tree_name: Name of the output tree
            title: Title of the output tree
            basket_size: Records buffered before each write
            volume_prefix: Prefix of the per-volume branch names
        """
        if basket_size <= 0:
            raise ValueError(f"basket_size must be positive, got {basket_size}")

        self.logger = logging.getLogger(self.__class__.__name__)
        self.output_path = output_path
        self.volume_names = list(volume_names)
        self.tree_name = tree_name
        self.title = title
        self.basket_size = basket_size
        self.volume_prefix = volume_prefix

        self._file = None
        self._tree = None
        self._created = False
        self._buffer: list[OutputRecord] = []
        self._n_flushed = 0

    def branch_types(self) -> dict:
        """Output schema: branch name to uproot type."""
        types = {
            "event_id": np.int32,
            "total_primary_energy": np.float64,
            "n_channels": np.int32,
            "all_channel_integral": np.float64,
            "channel_integrals": "var * float64",
        }
        for name in self.volume_names:
            types[f"{self.volume_prefix}{name}"] = np.float64
        return types

    def open(self):
        """
        Create the output file and tree.

        Raises:
            OSError: If the output file cannot be created
        """
        try:
            self._file = uproot.recreate(self.output_path)
        except OSError as e:
            raise OSError(f"Cannot create output file {self.output_path}: {e}") from e
        self._created = True

        self._tree = self._file.mktree(self.tree_name, self.branch_types(), title=self.title)
        self.logger.debug(
            f"Created tree {self.tree_name} in {self.output_path} "
            f"with {len(self.volume_names)} volume branch(es)"
        )

    def append(self, record: OutputRecord):
        if self._tree is None:
            raise RuntimeError("Sink is not open")

        expected_id = self.count_written()
        if record.event_id != expected_id:
            raise ValueError(
                f"Records must be appended in order: expected event_id {expected_id}, "
                f"got {record.event_id}"
            )

        self._buffer.append(record)
        if len(self._buffer) >= self.basket_size:
            self.flush()

    def _columns(self, records: list[OutputRecord]) -> dict:
        """Turn buffered records into one array per branch."""
        counts = np.array([len(r.channel_integrals) for r in records], dtype=np.int64)
        flat_integrals = np.array(
            [value for r in records for value in r.channel_integrals], dtype=np.float64
        )
        columns = {
            "event_id": np.array([r.event_id for r in records], dtype=np.int32),
            "total_primary_energy": np.array(
                [r.total_primary_energy for r in records], dtype=np.float64
            ),
            "n_channels": np.array([r.n_channels for r in records], dtype=np.int32),
            "all_channel_integral": np.array(
                [r.all_channel_integral for r in records], dtype=np.float64
            ),
            "channel_integrals": ak.unflatten(flat_integrals, counts),
        }
        for name in self.volume_names:
            columns[f"{self.volume_prefix}{name}"] = np.array(
                [r.volume_edep[name] for r in records], dtype=np.float64
            )
        return columns

    def flush(self):
        if not self._buffer:
            return

        self._tree.extend(self._columns(self._buffer))
        self._n_flushed += len(self._buffer)
        self._buffer = []

    def close(self):
        if self._file is None:
            return

        try:
            self.flush()
        finally:
            self._file.close()
            self._file = None
            self._tree = None

    def count_written(self) -> int:
        return self._n_flushed + len(self._buffer)

    @property
    def output_created(self) -> bool:
        """True once open() has created the output file."""
        return self._created

    @property
    def tree_entries(self) -> Optional[int]:
        """Entries in the output tree, None once closed."""
        if self._tree is None:
            return None
        return self._tree.num_entries
