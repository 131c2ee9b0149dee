"""
WaveformReducer service - Integrates DAQ waveforms per channel.

Stateful service: owns the channel count high-water mark and the channel
integral array, both carried from one event to the next.
"""

import logging

import numpy as np

from domain.events import DAQRecord


class WaveformReducer:
    """
    Reduces an event's DAQ records into per-channel integrals.

    Channel state rules:
      - ``n_channels`` only grows while events carry DAQ data; it is raised
        by the waveform count of a DAQ record and by channel ids at or above it.
      - Integral values are zeroed every event, the array length is kept.
      - An event with no DAQ records resets ``n_channels`` to 0 and empties
        the array.

    A channel id equal to or above ``n_channels`` raises the count to the
    channel id itself, not id + 1. The array is always grown far enough to
    hold the id.
    """

    def __init__(self):
        """Initialize with no channels seen."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self._n_channels = 0
        self._integrals = np.zeros(0, dtype=np.float64)

    @property
    def n_channels(self) -> int:
        """Current channel count high-water mark."""
        return self._n_channels

    @property
    def channel_integrals(self) -> np.ndarray:
        """Copy of the current channel integral array."""
        return self._integrals.copy()

    def reset(self):
        """Zero every channel integral, keeping the array length and n_channels."""
        self._integrals[:] = 0.0

    def _grow(self, length: int):
        """Extend the integral array with zeros up to ``length``."""
        if len(self._integrals) < length:
            self._integrals = np.concatenate([
                self._integrals,
                np.zeros(length - len(self._integrals), dtype=np.float64)
            ])

    def _clear(self):
        self._n_channels = 0
        self._integrals = np.zeros(0, dtype=np.float64)

    def reduce(self, daq_records: list[DAQRecord]) -> tuple[tuple[float, ...], int, float]:
        """
        Integrate every waveform of one event.

        Args:
            daq_records: DAQ records of the event, possibly empty

        Returns:
            Tuple of (channel_integrals, n_channels, all_channel_integral)
        """
        self.reset()

        if not daq_records:
            self._clear()
            return (), 0, 0.0

        all_channel_integral = 0.0

        for daq_record in daq_records:
            n_waveforms = len(daq_record.waveforms)
            self.logger.debug(f"  number of waveforms: {n_waveforms}")

            if n_waveforms > self._n_channels:
                self._n_channels = n_waveforms
            self._grow(self._n_channels)

            for waveform in daq_record.waveforms:
                integral = waveform.integral
                chid = waveform.channel_id

                if chid >= self._n_channels:
                    self._n_channels = chid
                    self._grow(chid + 1)

                self._integrals[chid] = integral
                all_channel_integral += integral

        return (
            tuple(float(value) for value in self._integrals),
            self._n_channels,
            all_channel_integral,
        )
