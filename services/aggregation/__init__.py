"""
Aggregation services.

Services that turn one event's input records into a flat output record.
"""

from .states import EventState
from .cursor import DualStreamCursor
from .truth_reducer import TruthReducer
from .waveform_reducer import WaveformReducer
from .event_aggregator import EventAggregator

__all__ = [
    "EventState",
    "DualStreamCursor",
    "TruthReducer",
    "WaveformReducer",
    "EventAggregator",
]
