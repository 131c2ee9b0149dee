"""
Statistics-related domain models.

Immutable data structures summarizing a flattening run.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RunSummary:
    """
    End-of-run summary.

    Immutable snapshot of what was read and written.
    """

    # Counts
    truth_entries: int
    daq_entries: int
    events_processed: int
    records_written: int

    # Output
    output_path: str

    # Timing
    start_time: datetime
    end_time: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate run summary."""
        if self.truth_entries < 0:
            raise ValueError(f"truth_entries must be non-negative, got {self.truth_entries}")
        if self.daq_entries < 0:
            raise ValueError(f"daq_entries must be non-negative, got {self.daq_entries}")
        if self.events_processed != min(self.truth_entries, self.daq_entries):
            raise ValueError(
                f"events_processed ({self.events_processed}) must equal "
                f"min(truth_entries, daq_entries) ({min(self.truth_entries, self.daq_entries)})"
            )
        if self.records_written < 0:
            raise ValueError(f"records_written must be non-negative, got {self.records_written}")
        if self.end_time < self.start_time:
            raise ValueError("end_time must be after start_time")

    @property
    def counts_mismatched(self) -> bool:
        """True if the two input trees had different entry counts."""
        return self.truth_entries != self.daq_entries

    @property
    def elapsed_time_sec(self) -> float:
        """Wall time of the run in seconds."""
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict:
        """Convert to dictionary for logging or JSON serialization."""
        return {
            "truth_entries": self.truth_entries,
            "daq_entries": self.daq_entries,
            "counts_mismatched": self.counts_mismatched,
            "events_processed": self.events_processed,
            "records_written": self.records_written,
            "output_path": self.output_path,
            "elapsed_time_sec": f"{self.elapsed_time_sec:.1f}",
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
        }
