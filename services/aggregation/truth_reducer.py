"""
TruthReducer service - Reduces truth records to summary values.

Computes the total primary energy and the energy deposited in each
requested volume.
"""

import logging
from typing import Optional

from domain.events import TruthRecord
from domain.volumes import VolumeFilterSet


class TruthReducer:
    """
    Stateless reducer over one TruthRecord.

    Segments are attributed by their owning volume name only, matched by
    exact string equality. The detector grouping does not affect the result.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def total_primary_energy(truth_record: Optional[TruthRecord]) -> float:
        """Raw sum of the energy of every primary particle of every vertex."""
        if truth_record is None:
            return 0.0

        total = 0.0
        for vertex in truth_record.primaries:
            for particle in vertex.particles:
                total += particle.energy
        return total

    def volume_energy(
        self,
        truth_record: Optional[TruthRecord],
        volume_filter: VolumeFilterSet
    ) -> dict[str, float]:
        """
        Sum segment energy deposits per requested volume.

        Args:
            truth_record: Decoded truth entry, or None if absent
            volume_filter: Volumes to extract

        Returns:
            Ordered mapping with every filter name, 0.0 where nothing matched
        """
        volume_edep = volume_filter.zero_mapping()

        if truth_record is None or not volume_filter:
            return volume_edep

        for det_name, segments in truth_record.segment_detectors.items():
            self.logger.debug(f"Loop through [{det_name}] hits ({len(segments)} segments)")
            for segment in segments:
                if segment.volume_name in volume_edep:
                    volume_edep[segment.volume_name] += segment.energy_deposit

        return volume_edep

    def reduce(
        self,
        truth_record: Optional[TruthRecord],
        volume_filter: VolumeFilterSet
    ) -> tuple[float, dict[str, float]]:
        """
        Reduce one truth record.

        Args:
            truth_record: Decoded truth entry, or None if absent
            volume_filter: Volumes to extract

        Returns:
            Tuple of (total_primary_energy, volume_edep)
        """
        return (
            self.total_primary_energy(truth_record),
            self.volume_energy(truth_record, volume_filter),
        )
