"""
Shared fixtures for the flattener tests.
"""

import numpy as np
import pytest

from domain.events import (
    Particle,
    PrimaryVertex,
    EnergySegment,
    TruthRecord,
    Waveform,
    DAQRecord,
)
from services.output.summary_sink import SummaryRecordSink


class ListSink(SummaryRecordSink):
    """Sink keeping appended records in a list."""

    def __init__(self):
        self.records = []
        self.opened = False
        self.closed = False
        self.flush_count = 0

    def open(self):
        self.opened = True

    def append(self, record):
        self.records.append(record)

    def flush(self):
        self.flush_count += 1

    def close(self):
        self.flush()
        self.closed = True

    def count_written(self) -> int:
        return len(self.records)


@pytest.fixture
def list_sink():
    return ListSink()


@pytest.fixture
def make_list_sink():
    return ListSink


@pytest.fixture
def make_truth():
    """
    Factory for TruthRecord.

    vertex_energies: one list of particle energies per vertex
    segments: {detector_name: [(volume_name, edep), ...]}
    """
    def _make(vertex_energies=(), segments=None):
        primaries = tuple(
            PrimaryVertex(particles=tuple(
                Particle(momentum=(0.0, 0.0, 0.0, energy)) for energy in energies
            ))
            for energies in vertex_energies
        )
        segment_detectors = {
            det_name: tuple(
                EnergySegment(volume_name=volume, energy_deposit=edep)
                for volume, edep in det_segments
            )
            for det_name, det_segments in (segments or {}).items()
        }
        return TruthRecord(primaries=primaries, segment_detectors=segment_detectors)

    return _make


@pytest.fixture
def make_daq():
    """
    Factory for an event's DAQ record list.

    Each positional argument is one DAQ record given as [(chid, samples), ...].
    """
    def _make(*daq_waveforms, period=1.0):
        return [
            DAQRecord(waveforms=tuple(
                Waveform(
                    channel_id=chid,
                    samples=np.asarray(samples, dtype=np.float64),
                    sample_period=period
                )
                for chid, samples in waveforms
            ))
            for waveforms in daq_waveforms
        ]

    return _make
