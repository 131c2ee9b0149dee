"""
Event-related domain models.

Immutable data structures representing one decoded event from each input tree.
"""

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class Particle:
    """A primary particle. Momentum is (px, py, pz, E)."""

    momentum: tuple[float, float, float, float]

    def __post_init__(self):
        """Validate the four-vector."""
        if len(self.momentum) != 4:
            raise ValueError(f"momentum must have 4 components, got {len(self.momentum)}")

    @property
    def energy(self) -> float:
        """Energy component of the four-vector."""
        return self.momentum[3]


@dataclass(frozen=True)
class PrimaryVertex:
    """A primary interaction vertex and the particles leaving it."""

    particles: tuple[Particle, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EnergySegment:
    """An energy deposit attributed to one physical volume."""

    volume_name: str
    energy_deposit: float

    def __post_init__(self):
        """Validate the segment."""
        if self.energy_deposit < 0:
            raise ValueError(f"energy_deposit must be non-negative, got {self.energy_deposit}")


@dataclass(frozen=True)
class TruthRecord:
    """
    Truth information for one event.

    Holds the primary vertices and the energy-deposit segments grouped by
    the detector that recorded them.
    """

    primaries: tuple[PrimaryVertex, ...] = field(default_factory=tuple)
    segment_detectors: dict[str, tuple[EnergySegment, ...]] = field(default_factory=dict)

    @property
    def segment_count(self) -> int:
        """Total number of segments across all detectors."""
        return sum(len(segments) for segments in self.segment_detectors.values())


@dataclass(frozen=True, eq=False)
class Waveform:
    """Digitized samples of one DAQ channel."""

    channel_id: int
    samples: np.ndarray
    sample_period: float

    def __post_init__(self):
        """Validate the waveform."""
        if self.channel_id < 0:
            raise ValueError(f"channel_id must be non-negative, got {self.channel_id}")

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def integral(self) -> float:
        """Sum of samples times the sample period, 0 for an empty waveform."""
        if len(self.samples) == 0:
            return 0.0
        return float(np.sum(self.samples)) * self.sample_period


@dataclass(frozen=True)
class DAQRecord:
    """One DAQ readout: the waveforms of every digitized channel."""

    waveforms: tuple[Waveform, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.waveforms)
