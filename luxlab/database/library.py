from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from luxlab.models.distribution import PhotometricDistribution
from luxlab.parser.ies_parser import parse_ies_file, parse_ies_text

logger = logging.getLogger(__name__)

DEMO_DIR = Path(__file__).parent / "demo"

_DEMO_ENTRIES = (
    ("wide-batwing", "Wide Batwing", "Soft batwing distribution suited for open offices."),
    ("narrow-beam", "Narrow Beam", "Punchy spot for accenting surfaces or corridors."),
    ("symmetric-soft", "Symmetric Soft", "Balanced distribution for general ambient lighting."),
)


@dataclass(frozen=True)
class LuminaireEntry:
    id: str
    name: str
    description: str
    lumens: float
    photometry: PhotometricDistribution

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "lumens": self.lumens,
            "metadata": dict(self.photometry.metadata),
        }


def demo_ies_path(demo_id: str) -> Path:
    p = DEMO_DIR / f"{demo_id}.ies"
    if not p.is_file():
        known = ", ".join(d for d, _, _ in _DEMO_ENTRIES)
        raise KeyError(f"Unknown demo luminaire '{demo_id}' (known: {known})")
    return p


class LuminaireLibrary:
    """
    Session-scoped list of luminaires, newest upload first.

    A file that fails to parse raises ParseError and leaves the library as it
    was.
    """

    def __init__(self, entries: Optional[List[LuminaireEntry]] = None) -> None:
        self._entries: List[LuminaireEntry] = list(entries or [])

    @classmethod
    def demo(cls) -> "LuminaireLibrary":
        entries: List[LuminaireEntry] = []
        for demo_id, name, description in _DEMO_ENTRIES:
            parsed = parse_ies_file(demo_ies_path(demo_id))
            entries.append(
                LuminaireEntry(
                    id=demo_id,
                    name=name,
                    description=description,
                    lumens=parsed.total_lumens,
                    photometry=parsed.photometry,
                )
            )
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LuminaireEntry]:
        return iter(self._entries)

    def ids(self) -> List[str]:
        return [e.id for e in self._entries]

    def get(self, entry_id: str) -> LuminaireEntry:
        for e in self._entries:
            if e.id == entry_id:
                return e
        raise KeyError(entry_id)

    @property
    def first(self) -> Optional[LuminaireEntry]:
        return self._entries[0] if self._entries else None

    def add_ies_text(self, text: str, name: str, description: str = "Uploaded IES file") -> LuminaireEntry:
        parsed = parse_ies_text(text, source_path=f"{name}.ies")
        entry = LuminaireEntry(
            id=self._unique_id(f"upload-{name}"),
            name=name,
            description=description,
            lumens=parsed.total_lumens,
            photometry=parsed.photometry,
        )
        self._entries.insert(0, entry)
        logger.info("Loaded luminaire %s (%g lm)", entry.name, entry.lumens)
        return entry

    def add_ies_file(self, path: str | Path) -> LuminaireEntry:
        p = Path(path).expanduser().resolve()
        text = p.read_text(encoding="utf-8", errors="replace")
        name = p.name[:-4] if p.name.lower().endswith(".ies") else p.name
        return self.add_ies_text(text, name=name)

    def _unique_id(self, base: str) -> str:
        taken = set(self.ids())
        if base not in taken:
            return base
        n = 2
        while f"{base}-{n}" in taken:
            n += 1
        return f"{base}-{n}"
