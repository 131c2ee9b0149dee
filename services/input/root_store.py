"""
ROOT tree record stores - Decode simulation trees with uproot.

Reads entries in steps with awkward and converts single entries into
domain records. Branch names come from the configuration.
"""

import logging
from typing import Optional

import awkward as ak
import numpy as np

from domain.config import TruthBranchConfig, DAQBranchConfig
from domain.events import (
    Particle,
    PrimaryVertex,
    EnergySegment,
    TruthRecord,
    Waveform,
    DAQRecord,
)
from .record_store import RecordStore


def get_tree(root_file, tree_name: str):
    """
    Fetch a tree from an opened ROOT file.

    Args:
        root_file: File opened with ``uproot.open``
        tree_name: Name of the tree, without cycle number

    Returns:
        The uproot TTree

    Raises:
        KeyError: If the file has no such tree
    """
    available_trees = [key.split(";")[0] for key in root_file.keys()]
    if tree_name not in available_trees:
        raise KeyError(
            f"Cannot find {tree_name} tree in input file "
            f"(available: {sorted(set(available_trees))})"
        )
    return root_file[tree_name]


class TreeRecordStore(RecordStore):
    """
    Record store over one uproot TTree.

    Keeps one step of entries in memory; sequential decoding reads each
    step from the file once.
    """

    def __init__(self, tree, branches: list[str], step_size: int = 1000):
        """
        Initialize the store.

        Args:
            tree: uproot TTree
            branches: Branches to read for every entry
            step_size: Number of entries read per tree access

        Raises:
            KeyError: If a branch is missing from the tree
        """
        if step_size <= 0:
            raise ValueError(f"step_size must be positive, got {step_size}")

        self.logger = logging.getLogger(self.__class__.__name__)
        self._tree = tree
        self._branches = list(branches)
        self._step_size = step_size
        self._n_entries = int(tree.num_entries)

        self._cache: Optional[ak.Array] = None
        self._cache_start = 0
        self._cache_stop = 0

        self._validate_branches()

    def _validate_branches(self):
        tree_branches = set(self._tree.keys())
        missing = [b for b in self._branches if b not in tree_branches]
        if missing:
            raise KeyError(f"Branches {missing} not found in tree {self.tree_name}")

    @property
    def tree_name(self) -> str:
        return getattr(self._tree, "name", "<tree>")

    def count(self) -> int:
        return self._n_entries

    def _entry(self, index: int):
        """Return the awkward record of one entry, reading a new step if needed."""
        self._check_index(index)

        if self._cache is None or not (self._cache_start <= index < self._cache_stop):
            entry_stop = min(index + self._step_size, self._n_entries)
            self.logger.debug(f"Reading {self.tree_name} entries {index}-{entry_stop}")
            self._cache = self._tree.arrays(
                self._branches,
                entry_start=index,
                entry_stop=entry_stop,
                library="ak"
            )
            self._cache_start = index
            self._cache_stop = entry_stop

        return self._cache[index - self._cache_start]


class TruthTreeStore(TreeRecordStore):
    """Decodes edep-sim truth entries into TruthRecord objects."""

    def __init__(
        self,
        tree,
        branches: Optional[TruthBranchConfig] = None,
        step_size: int = 1000
    ):
        self.branches = branches or TruthBranchConfig()
        super().__init__(tree, self.branches.names(), step_size)

    def decode(self, index: int) -> TruthRecord:
        entry = self._entry(index)
        b = self.branches

        primaries = tuple(
            PrimaryVertex(particles=tuple(
                Particle(momentum=tuple(float(c) for c in momentum))
                for momentum in vertex
            ))
            for vertex in ak.to_list(entry[b.primary_momentum])
        )

        segment_detectors: dict[str, list[EnergySegment]] = {}
        for det_name, volume_name, edep in zip(
            ak.to_list(entry[b.segment_detector]),
            ak.to_list(entry[b.segment_volume]),
            ak.to_list(entry[b.segment_edep]),
        ):
            segment_detectors.setdefault(det_name, []).append(
                EnergySegment(volume_name=volume_name, energy_deposit=float(edep))
            )

        return TruthRecord(
            primaries=primaries,
            segment_detectors={
                det_name: tuple(segments)
                for det_name, segments in segment_detectors.items()
            }
        )


class DAQTreeStore(TreeRecordStore):
    """Decodes DAQ entries into the list of DAQRecord objects of each event."""

    def __init__(
        self,
        tree,
        branches: Optional[DAQBranchConfig] = None,
        step_size: int = 1000
    ):
        self.branches = branches or DAQBranchConfig()
        super().__init__(tree, self.branches.names(), step_size)

    def decode(self, index: int) -> list[DAQRecord]:
        entry = self._entry(index)
        b = self.branches

        daq_records = []
        for channels, periods, samples in zip(
            ak.to_list(entry[b.waveform_channel]),
            ak.to_list(entry[b.waveform_period]),
            ak.to_list(entry[b.waveform_samples]),
        ):
            waveforms = tuple(
                Waveform(
                    channel_id=int(chid),
                    samples=np.asarray(wfm_samples, dtype=np.float64),
                    sample_period=float(period)
                )
                for chid, period, wfm_samples in zip(channels, periods, samples)
            )
            daq_records.append(DAQRecord(waveforms=waveforms))

        return daq_records
