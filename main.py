#!/usr/bin/env python3
"""
Main entry point for the edep flattener.

Reads a g4-coh-ar-750 simulation ROOT file holding a truth tree
(EDepSimEvents) and a DAQ tree (CENNS), and writes one flat summary entry
per event to the EdepInfo tree of the output file:

  event_id, total_primary_energy, n_channels, all_channel_integral,
  channel_integrals[], and edep_<volume> for every requested volume.
"""

import sys
import logging
import argparse
import yaml

from domain.config import FlattenConfig
from domain.volumes import VolumeFilterSet
from pipeline.executor import FlattenExecutor
from services.input.volume_list import read_volume_list


def setup_logging(level: str = "INFO"):
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def load_config(config_path: str) -> dict:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Flatten Edep Info - per-event energy deposit and waveform summary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Channel and primary info only
  python main.py sim_output.root flat_output.root

  # Also extract energy deposits for the volumes listed in volumes.txt
  python main.py sim_output.root flat_output.root volumes.txt

  # Custom tree/branch names
  python main.py sim_output.root flat_output.root volumes.txt --config config.yaml

Format of volumes.txt:
  LArVol
  volCryostat
  volPanel
  # Comments starting with # are ignored
        """
    )

    parser.add_argument(
        "input_file",
        help="ROOT file from g4-coh-ar-750 simulation"
    )
    parser.add_argument(
        "output_file",
        help="Output ROOT file with flattened data"
    )
    parser.add_argument(
        "volumes_file", nargs="?", default=None,
        help="Optional text file with volume names (one per line)"
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to YAML configuration file (default: built-in defaults)"
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--no-progress", action="store_true",
        help="Disable the progress bar"
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Validate configuration and inputs without writing output"
    )

    return parser.parse_args(argv)


def build_config(args) -> FlattenConfig:
    """Create the validated configuration from YAML and CLI overrides."""
    config_dict = load_config(args.config) if args.config else {}

    if args.no_progress:
        config_dict.setdefault("run", {})
        config_dict["run"]["show_progress_bar"] = False

    return FlattenConfig.from_dict(config_dict)


def build_volume_filter(volumes_file) -> VolumeFilterSet:
    """Read the optional volume list into a VolumeFilterSet."""
    logger = logging.getLogger(__name__)

    if volumes_file is None:
        logger.info("No volumes file provided - will extract channel and primary info only")
        return VolumeFilterSet()

    logger.info(f"Reading volume names from: {volumes_file}")
    volume_filter = VolumeFilterSet.from_names(read_volume_list(volumes_file))
    logger.info(f"Found {len(volume_filter)} volume(s)")
    return volume_filter


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("Flatten Edep Info Parser")
    logger.info("=" * 60)

    try:
        config = build_config(args)
        volume_filter = build_volume_filter(args.volumes_file)
        executor = FlattenExecutor(config, volume_filter)

        if args.dry_run:
            truth_entries, daq_entries = executor.check_inputs(args.input_file)
            logger.info("Dry run mode - configuration and inputs are valid, exiting")
            logger.info(f"Truth entries: {truth_entries}, DAQ entries: {daq_entries}")
            logger.info(f"Volumes: {list(volume_filter)}")
            return 0

        executor.run(args.input_file, args.output_file)
        logger.info("Done!")
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
