"""
Volume filter domain model.

The set of physical volume names whose energy deposits are extracted.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator


@dataclass(frozen=True)
class VolumeFilterSet:
    """
    Ordered, duplicate-free set of volume names.

    Insertion order is kept so the output columns come out in the same order
    as the volume list. An empty set disables per-volume extraction.
    """

    names: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Drop duplicates, keeping the first occurrence."""
        for name in self.names:
            if not isinstance(name, str) or not name:
                raise ValueError(f"volume names must be non-empty strings, got {name!r}")
        # dict keeps first-seen order
        object.__setattr__(self, "names", tuple(dict.fromkeys(self.names)))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> 'VolumeFilterSet':
        """Create a filter set from any iterable of names."""
        return cls(names=tuple(names))

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __bool__(self) -> bool:
        return bool(self.names)

    def index(self, name: str) -> int:
        """Position of ``name`` in the set. Raises ValueError if absent."""
        return self.names.index(name)

    def zero_mapping(self) -> dict[str, float]:
        """Fresh ordered mapping of every volume name to 0.0."""
        return {name: 0.0 for name in self.names}
