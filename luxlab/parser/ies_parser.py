from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from luxlab.models.distribution import PhotometricDistribution
from luxlab.models.photometry import PhotometryHeader
from luxlab.models.tilt import TiltData
from luxlab.parser.errors import ParseError
from luxlab.parser.tokenize import NumberCursor, tokenize_numbers

logger = logging.getLogger(__name__)

__all__ = ["IESParseResult", "ParseError", "parse_ies_file", "parse_ies_text"]

SUPPORTED_TILT = ("NONE", "INCLUDE")
MONOTONIC_EPS = 1e-6


@dataclass(frozen=True)
class IESParseResult:
    photometry: PhotometricDistribution
    total_lumens: float        # lamp lumens, or peak candela for absolute photometry
    max_candela: float
    header: PhotometryHeader
    tilt: Optional[TiltData] = None
    standard_line: Optional[str] = None


def _fmt(v: float) -> str:
    return f"{v:g}"


def _scan_keywords(lines: List[str]) -> Tuple[Dict[str, str], int]:
    """Collect `[KEY] value` lines up to the TILT= line; return (keywords, tilt_idx0)."""
    keywords: Dict[str, str] = {}
    for idx0, s in enumerate(lines):
        if s.upper().startswith("TILT="):
            return keywords, idx0
        if s.startswith("[") and "]" in s:
            end = s.find("]")
            keywords[s[1:end].strip()] = s[end + 1 :].strip()
    raise ParseError("Missing TILT specification")


def _tilt_type(tilt_line: str) -> str:
    spec = "".join(tilt_line.upper().split())
    return spec.split("=")[1] or "NONE"


def _is_monotonic(values: List[float], eps: float = MONOTONIC_EPS) -> bool:
    return all(values[i] + eps >= values[i - 1] for i in range(1, len(values)))


def _read_header(cursor: NumberCursor) -> PhotometryHeader:
    (
        num_lamps,
        lumens_per_lamp,
        candela_multiplier,
        num_vertical,
        num_horizontal,
        photometric_type,
        units_type,
        width,
        length,
        height,
    ) = cursor.next_numbers(10, "header")
    nv = int(round(num_vertical))
    nh = int(round(num_horizontal))
    if nv < 0 or nh < 0:
        raise ParseError(f"Invalid angle counts in header: {nv} vertical, {nh} horizontal")

    # No explicit flag marks the ballast/lamp factor + input watts block; it is
    # present whenever enough numbers remain to hold it ahead of the tables.
    has_ballast = cursor.remaining() >= nv + nh + nv * nh + 3
    if has_ballast:
        cursor.skip(3)

    return PhotometryHeader(
        num_lamps=num_lamps,
        lumens_per_lamp=lumens_per_lamp,
        candela_multiplier=candela_multiplier,
        num_vertical_angles=nv,
        num_horizontal_angles=nh,
        photometric_type=photometric_type,
        units_type=units_type,
        width=width,
        length=length,
        height=height,
        has_ballast_block=has_ballast,
    )


def parse_ies_text(text: str, source_path: str | Path | None = None) -> IESParseResult:
    """
    Parse LM-63 text into a photometric distribution.

    Fields are consumed strictly in file order and the first structural
    problem raises ParseError; nothing is returned for a partial parse.
    """
    filename = Path(source_path).name if source_path is not None else None
    try:
        lines = [ln.strip() for ln in text.replace("\r\n", "\n").replace("\r", "\n").split("\n")]
        if not any(lines):
            raise ParseError("Empty file")

        standard_line = lines[0] if lines[0].upper().startswith("IESNA") else None
        keywords, tilt_idx0 = _scan_keywords(lines)

        tilt_type = _tilt_type(lines[tilt_idx0])
        if tilt_type not in SUPPORTED_TILT:
            raise ParseError(f"Unsupported TILT type: {tilt_type}", line_no=tilt_idx0 + 1)

        cursor = NumberCursor(tokenize_numbers(lines[tilt_idx0 + 1 :]))

        tilt: Optional[TiltData] = None
        if tilt_type == "INCLUDE":
            count = cursor.next_int("tilt angle count")
            angles = cursor.next_numbers(count, "tilt angles")
            factors = cursor.next_numbers(count, "tilt multipliers")
            tilt = TiltData(angles_deg=angles, factors=factors)

        header = _read_header(cursor)
        nv = header.num_vertical_angles
        nh = header.num_horizontal_angles

        vertical = cursor.next_numbers(nv, "vertical angles")
        horizontal = cursor.next_numbers(nh, "horizontal angles")
        flat = cursor.next_numbers(nv * nh, "candelas")

        m = header.candela_multiplier
        rows: List[List[float]] = []
        for h in range(nh):
            row = [v * m for v in flat[h * nv : (h + 1) * nv]]
            rows.append(tilt.apply(row) if tilt is not None else row)

        if not _is_monotonic(vertical) or not _is_monotonic(horizontal):
            raise ParseError("Angles must be monotonic increasing")
    except ParseError as e:
        if e.filename is None and filename is not None:
            e.filename = filename
        raise

    max_candela = max((v for row in rows for v in row), default=0.0)
    lamp_lumens = header.total_lumens if not header.is_absolute else None

    metadata = dict(keywords)
    metadata["photometricType"] = _fmt(header.photometric_type)
    metadata["unitsType"] = "meters" if header.units_type == 1 else "feet"
    metadata["dimensions"] = f"{_fmt(header.width)}x{_fmt(header.length)}x{_fmt(header.height)}"

    if any(v < 0 for row in rows for v in row):
        logger.warning("Negative candela values in %s", filename or "IES text")
    logger.debug(
        "Parsed IES %s: %d vertical x %d horizontal angles, tilt=%s, ballast block=%s",
        filename or "<text>",
        nv,
        nh,
        tilt_type,
        header.has_ballast_block,
    )

    distribution = PhotometricDistribution.from_lists(
        vertical_angles=vertical,
        horizontal_angles=horizontal,
        candela=rows,
        metadata=metadata,
        total_lumens=lamp_lumens,
    )
    return IESParseResult(
        photometry=distribution,
        total_lumens=lamp_lumens if lamp_lumens is not None else max_candela,
        max_candela=max_candela,
        header=header,
        tilt=tilt,
        standard_line=standard_line,
    )


def parse_ies_file(path: str | Path) -> IESParseResult:
    p = Path(path).expanduser().resolve()
    text = p.read_text(encoding="utf-8", errors="replace")
    return parse_ies_text(text, source_path=p)
