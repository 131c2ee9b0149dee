"""
Volume list loader.

Reads the optional text file naming the volumes to extract.
"""

import logging

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\r\n"


def read_volume_list(filename: str) -> list[str]:
    """
    Read volume names from a text file, one per line.

    Leading and trailing whitespace is stripped; empty lines and lines
    starting with ``#`` are skipped. Duplicates are kept, VolumeFilterSet
    removes them.

    Args:
        filename: Path to the volume list

    Returns:
        Volume names in file order, or an empty list if the file cannot be
        opened or is not valid text
    """
    try:
        with open(filename, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot open volumes file {filename}: {e}")
        logger.warning("Proceeding without volume filtering")
        return []

    volumes = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip(_WHITESPACE)

        if not line or line.startswith("#"):
            continue

        volumes.append(line)
        logger.debug(f"  Line {line_number}: {line}")

    return volumes
