"""
Domain models for the edep flattener.

Pure data structures with validation, no business logic.
"""

from .events import (
    Particle,
    PrimaryVertex,
    EnergySegment,
    TruthRecord,
    Waveform,
    DAQRecord,
)
from .volumes import VolumeFilterSet
from .output import OutputRecord, VOLUME_BRANCH_PREFIX
from .statistics import RunSummary
from .config import FlattenConfig, TruthBranchConfig, DAQBranchConfig

__all__ = [
    "Particle",
    "PrimaryVertex",
    "EnergySegment",
    "TruthRecord",
    "Waveform",
    "DAQRecord",
    "VolumeFilterSet",
    "OutputRecord",
    "VOLUME_BRANCH_PREFIX",
    "RunSummary",
    "FlattenConfig",
    "TruthBranchConfig",
    "DAQBranchConfig",
]
