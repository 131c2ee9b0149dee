"""
Input services.

Record stores for the two input trees and the volume list loader.
"""

from .record_store import RecordStore, SequenceRecordStore
from .root_store import TreeRecordStore, TruthTreeStore, DAQTreeStore, get_tree
from .volume_list import read_volume_list

__all__ = [
    "RecordStore",
    "SequenceRecordStore",
    "TreeRecordStore",
    "TruthTreeStore",
    "DAQTreeStore",
    "get_tree",
    "read_volume_list",
]
