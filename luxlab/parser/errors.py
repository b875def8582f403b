from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ParseError(Exception):
    message: str
    line_no: Optional[int] = None
    filename: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.filename}: " if self.filename else ""
        if self.line_no is None:
            return f"{prefix}{self.message}"
        return f"{prefix}Line {self.line_no}: {self.message}"
