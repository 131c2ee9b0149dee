"""
Configuration domain models.

Validated configuration objects for the flattener.
"""

from dataclasses import dataclass, field

from .output import VOLUME_BRANCH_PREFIX


@dataclass(frozen=True)
class TruthBranchConfig:
    """Branch names read from the truth (edep-sim) tree."""

    primary_momentum: str = "primary_momentum"
    segment_detector: str = "segment_detector"
    segment_volume: str = "segment_volume"
    segment_edep: str = "segment_edep"

    def names(self) -> list[str]:
        """All configured branch names."""
        return [
            self.primary_momentum,
            self.segment_detector,
            self.segment_volume,
            self.segment_edep,
        ]


@dataclass(frozen=True)
class DAQBranchConfig:
    """Branch names read from the DAQ tree."""

    waveform_channel: str = "waveform_channel"
    waveform_period: str = "waveform_period"
    waveform_samples: str = "waveform_samples"

    def names(self) -> list[str]:
        """All configured branch names."""
        return [
            self.waveform_channel,
            self.waveform_period,
            self.waveform_samples,
        ]


@dataclass(frozen=True)
class FlattenConfig:
    """
    Complete flattener configuration.

    Immutable configuration object validated at creation.
    """

    # Input
    truth_tree_name: str = "EDepSimEvents"
    daq_tree_name: str = "CENNS"
    read_step_size: int = 1000
    truth_branches: TruthBranchConfig = field(default_factory=TruthBranchConfig)
    daq_branches: DAQBranchConfig = field(default_factory=DAQBranchConfig)

    # Output
    output_tree_name: str = "EdepInfo"
    output_tree_title: str = "Flattened Energy Deposition Information"
    basket_size: int = 1000
    volume_branch_prefix: str = VOLUME_BRANCH_PREFIX

    # Behavior
    show_progress_bar: bool = True

    def __post_init__(self):
        """Validate flattener configuration."""
        if self.read_step_size <= 0:
            raise ValueError(f"read_step_size must be positive, got {self.read_step_size}")
        if self.basket_size <= 0:
            raise ValueError(f"basket_size must be positive, got {self.basket_size}")
        if not self.truth_tree_name:
            raise ValueError("truth_tree_name cannot be empty")
        if not self.daq_tree_name:
            raise ValueError("daq_tree_name cannot be empty")
        if not self.output_tree_name:
            raise ValueError("output_tree_name cannot be empty")

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'FlattenConfig':
        """
        Create FlattenConfig from a dictionary (e.g., loaded from YAML).

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Validated FlattenConfig instance
        """
        config_dict = config_dict or {}
        input_dict = config_dict.get("input", {})
        output_dict = config_dict.get("output", {})
        run_dict = config_dict.get("run", {})

        defaults = cls()
        truth_branches = TruthBranchConfig(**input_dict.get("truth_branches", {}))
        daq_branches = DAQBranchConfig(**input_dict.get("daq_branches", {}))

        return cls(
            truth_tree_name=input_dict.get("truth_tree_name", defaults.truth_tree_name),
            daq_tree_name=input_dict.get("daq_tree_name", defaults.daq_tree_name),
            read_step_size=input_dict.get("read_step_size", defaults.read_step_size),
            truth_branches=truth_branches,
            daq_branches=daq_branches,
            output_tree_name=output_dict.get("tree_name", defaults.output_tree_name),
            output_tree_title=output_dict.get("tree_title", defaults.output_tree_title),
            basket_size=output_dict.get("basket_size", defaults.basket_size),
            volume_branch_prefix=output_dict.get("volume_branch_prefix", defaults.volume_branch_prefix),
            show_progress_bar=run_dict.get("show_progress_bar", defaults.show_progress_bar),
        )
