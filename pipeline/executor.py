"""
FlattenExecutor - High-level flattening orchestrator.

Wires together the record stores, the event aggregator and the output sink,
and runs the event loop.
"""

import logging
import os
from datetime import datetime
from typing import Optional

import uproot
from tqdm import tqdm

from domain.config import FlattenConfig
from domain.statistics import RunSummary
from domain.volumes import VolumeFilterSet
from services.aggregation import DualStreamCursor, EventAggregator
from services.input import RecordStore, TruthTreeStore, DAQTreeStore, get_tree
from services.output import SummaryRecordSink, RootSummarySink


class FlattenExecutor:
    """
    High-level flattening executor.

    Responsible for:
    1. Opening the input trees as record stores
    2. Creating the output sink with the run's volume columns
    3. Running the event loop
    4. Returning the run summary
    """

    def __init__(self, config: FlattenConfig, volume_filter: Optional[VolumeFilterSet] = None):
        self.config = config
        self.volume_filter = volume_filter or VolumeFilterSet()
        self.logger = logging.getLogger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, input_path: str, output_path: str) -> RunSummary:
        """
        Flatten ``input_path`` into ``output_path``.

        If the run fails after the output file was created, the partial
        file is removed.

        Raises:
            FileNotFoundError: If the input file does not exist
            KeyError: If a required tree or branch is missing
            OSError: If the output file cannot be created
        """
        self._log_plan(input_path, output_path)

        with self._open_input(input_path) as root_file:
            truth_store, daq_store = self.open_stores(root_file)
            sink = self.create_sink(output_path)
            try:
                summary = self.process(truth_store, daq_store, sink, output_path)
            except Exception:
                if sink.output_created:
                    self._remove_partial_output(output_path)
                raise

        self._log_results(summary)
        return summary

    def check_inputs(self, input_path: str) -> tuple[int, int]:
        """
        Open the input stores without processing anything.

        Returns:
            Tuple of (truth_entries, daq_entries)
        """
        with self._open_input(input_path) as root_file:
            truth_store, daq_store = self.open_stores(root_file)
            cursor = DualStreamCursor(truth_store, daq_store)
            return cursor.truth_entries, cursor.daq_entries

    def open_stores(self, root_file) -> tuple[TruthTreeStore, DAQTreeStore]:
        """Build both record stores from an opened input file."""
        daq_tree = get_tree(root_file, self.config.daq_tree_name)
        truth_tree = get_tree(root_file, self.config.truth_tree_name)

        truth_store = TruthTreeStore(
            truth_tree,
            branches=self.config.truth_branches,
            step_size=self.config.read_step_size
        )
        daq_store = DAQTreeStore(
            daq_tree,
            branches=self.config.daq_branches,
            step_size=self.config.read_step_size
        )
        return truth_store, daq_store

    def create_sink(self, output_path: str) -> RootSummarySink:
        """Create the ROOT sink declaring one column per filtered volume."""
        return RootSummarySink(
            output_path,
            volume_names=list(self.volume_filter),
            tree_name=self.config.output_tree_name,
            title=self.config.output_tree_title,
            basket_size=self.config.basket_size,
            volume_prefix=self.config.volume_branch_prefix
        )

    def process(
        self,
        truth_store: RecordStore,
        daq_store: RecordStore,
        sink: SummaryRecordSink,
        output_path: str = ""
    ) -> RunSummary:
        """
        Run the event loop over two stores into a sink.

        Args:
            truth_store: Store of TruthRecord entries
            daq_store: Store of DAQRecord-list entries
            sink: Unopened sink; opened and closed here
            output_path: Output location reported in the summary

        Returns:
            RunSummary of the run
        """
        start_time = datetime.now()
        cursor = DualStreamCursor(truth_store, daq_store)
        aggregator = EventAggregator(self.volume_filter)

        self.logger.info(f"Processing {cursor.n_events} events...")

        with sink:
            progress_bar = tqdm(
                cursor,
                total=len(cursor),
                desc="Processing events",
                unit="event",
                disable=not self.config.show_progress_bar
            )
            with progress_bar as events:
                for index, truth_record, daq_records in events:
                    sink.append(aggregator.process(index, truth_record, daq_records))

        self.logger.info("Processing complete!")

        return RunSummary(
            truth_entries=cursor.truth_entries,
            daq_entries=cursor.daq_entries,
            events_processed=cursor.n_events,
            records_written=sink.count_written(),
            output_path=output_path,
            start_time=start_time,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _open_input(self, input_path: str):
        try:
            return uproot.open(input_path)
        except FileNotFoundError as e:
            raise FileNotFoundError(f"Cannot open input file {input_path}: {e}") from e

    def _remove_partial_output(self, output_path: str):
        if not os.path.isfile(output_path):
            return

        self.logger.warning(f"Removing incomplete output file {output_path}")
        try:
            os.remove(output_path)
        except OSError as e:
            self.logger.error(f"Cannot remove incomplete output file {output_path}: {e}")

    def _log_plan(self, input_path: str, output_path: str):
        self.logger.info(f"Input file:  {input_path}")
        self.logger.info(f"Output file: {output_path}")
        if self.volume_filter:
            self.logger.info("Volumes to extract:")
            for name in self.volume_filter:
                self.logger.info(f"  - {name}")
        else:
            self.logger.info("No volumes requested - extracting channel and primary info only")

    def _log_results(self, summary: RunSummary):
        self.logger.info("=" * 60)
        self.logger.info("Summary:")
        self.logger.info(f"  Events processed: {summary.events_processed}")
        self.logger.info(f"  Output tree entries: {summary.records_written}")
        self.logger.info(f"  Output file: {summary.output_path}")
        self.logger.info(f"  Elapsed time: {summary.elapsed_time_sec:.1f}s")
        self.logger.info("=" * 60)
