"""
EventAggregator service - Builds one flat output record per event.

Single responsibility: Drive the reset / populate / emit cycle of an event
and hold its working fields.
"""

import logging
from typing import Optional

from domain.events import TruthRecord, DAQRecord
from domain.output import OutputRecord
from domain.volumes import VolumeFilterSet
from .states import EventState, is_valid_transition
from .truth_reducer import TruthReducer
from .waveform_reducer import WaveformReducer


class EventAggregator:
    """
    Aggregates one event at a time.

    Every event passes through RESET before it can be populated and emitted,
    so no field value leaks from one event into the next. The waveform
    reducer, and with it the channel count, lives as long as the aggregator.
    """

    def __init__(
        self,
        volume_filter: VolumeFilterSet,
        truth_reducer: Optional[TruthReducer] = None,
        waveform_reducer: Optional[WaveformReducer] = None
    ):
        """
        Initialize aggregator.

        Args:
            volume_filter: Volumes to extract, fixed for the whole run
            truth_reducer: TruthReducer instance to use
            waveform_reducer: WaveformReducer instance to use
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.volume_filter = volume_filter
        self.truth_reducer = truth_reducer or TruthReducer()
        self.waveform_reducer = waveform_reducer or WaveformReducer()

        self._state = EventState.IDLE
        self._event_id = 0
        self._total_primary_energy = 0.0
        self._volume_edep = volume_filter.zero_mapping()
        self._channel_integrals: tuple[float, ...] = ()
        self._n_channels = 0
        self._all_channel_integral = 0.0

    @property
    def state(self) -> EventState:
        return self._state

    def _transition(self, new_state: EventState):
        if not is_valid_transition(self._state, new_state):
            raise RuntimeError(f"Invalid event transition: {self._state} → {new_state}")
        self._state = new_state

    def begin(self, index: int):
        """
        Reset the working fields for event ``index``.

        n_channels is carried over; the channel values are zeroed.
        """
        self._transition(EventState.RESET)

        self._event_id = index
        self._total_primary_energy = 0.0
        for name in self._volume_edep:
            self._volume_edep[name] = 0.0
        self.waveform_reducer.reset()
        self._channel_integrals = tuple(float(v) for v in self.waveform_reducer.channel_integrals)
        self._n_channels = self.waveform_reducer.n_channels
        self._all_channel_integral = 0.0

    def populate(
        self,
        truth_record: Optional[TruthRecord],
        daq_records: Optional[list[DAQRecord]]
    ):
        """Run both reducers over the event's records."""
        self._transition(EventState.POPULATED)

        total_primary_energy, volume_edep = self.truth_reducer.reduce(
            truth_record, self.volume_filter
        )
        self._total_primary_energy = total_primary_energy
        self._volume_edep.update(volume_edep)

        channel_integrals, n_channels, all_channel_integral = self.waveform_reducer.reduce(
            daq_records or []
        )
        self._channel_integrals = channel_integrals
        self._n_channels = n_channels
        self._all_channel_integral = all_channel_integral

    def emit(self) -> OutputRecord:
        """Hand out the populated event as an immutable OutputRecord."""
        self._transition(EventState.EMITTED)

        return OutputRecord(
            event_id=self._event_id,
            total_primary_energy=self._total_primary_energy,
            volume_edep=dict(self._volume_edep),
            channel_integrals=self._channel_integrals,
            n_channels=self._n_channels,
            all_channel_integral=self._all_channel_integral,
        )

    def process(
        self,
        index: int,
        truth_record: Optional[TruthRecord],
        daq_records: Optional[list[DAQRecord]]
    ) -> OutputRecord:
        """
        Run the full reset / populate / emit cycle for one event.

        Args:
            index: Event index, used as event_id
            truth_record: Decoded truth entry, or None if absent
            daq_records: Decoded DAQ records of the event, possibly empty

        Returns:
            The event's OutputRecord
        """
        self.begin(index)
        self.populate(truth_record, daq_records)
        return self.emit()
