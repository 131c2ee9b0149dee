"""
Output domain model.

The flat per-event summary written to the output tree.
"""

from dataclasses import dataclass, field


VOLUME_BRANCH_PREFIX = "edep_"


@dataclass(frozen=True)
class OutputRecord:
    """
    Flattened summary of one event.

    ``volume_edep`` always holds exactly the names of the run's volume filter,
    in filter order. ``channel_integrals`` is indexed by channel id and is at
    least ``n_channels`` long.
    """

    event_id: int
    total_primary_energy: float
    volume_edep: dict[str, float] = field(default_factory=dict)
    channel_integrals: tuple[float, ...] = field(default_factory=tuple)
    n_channels: int = 0
    all_channel_integral: float = 0.0

    def __post_init__(self):
        """Validate the output record."""
        if self.event_id < 0:
            raise ValueError(f"event_id must be non-negative, got {self.event_id}")
        if self.n_channels < 0:
            raise ValueError(f"n_channels must be non-negative, got {self.n_channels}")
        if len(self.channel_integrals) < self.n_channels:
            raise ValueError(
                f"channel_integrals has {len(self.channel_integrals)} entries, "
                f"fewer than n_channels ({self.n_channels})"
            )

    def branch_values(self, volume_prefix: str = VOLUME_BRANCH_PREFIX) -> dict:
        """
        Flat mapping of output branch name to value.

        Args:
            volume_prefix: Prefix prepended to each volume name

        Returns:
            Dict in output column order, volume columns last
        """
        values = {
            "event_id": self.event_id,
            "total_primary_energy": self.total_primary_energy,
            "n_channels": self.n_channels,
            "all_channel_integral": self.all_channel_integral,
            "channel_integrals": list(self.channel_integrals),
        }
        for name, edep in self.volume_edep.items():
            values[f"{volume_prefix}{name}"] = edep
        return values
