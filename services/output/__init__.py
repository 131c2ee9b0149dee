"""
Output services.

Sinks persisting the flattened per-event records.
"""

from .summary_sink import SummaryRecordSink, RootSummarySink

__all__ = [
    "SummaryRecordSink",
    "RootSummarySink",
]
