"""Data models for the protein sampler."""

import re
from dataclasses import dataclass

from .error_handler import EmptyTranslationError

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ProteinRecord:
    """A protein translated from one CDS feature."""
    
    id: str
    description: str
    sequence: str
    start: int = 0
    end: int = 0
    entry_id: str = ""
    
    def __post_init__(self):
        if not self.id:
            raise ValueError("ProteinRecord requires a non-empty id")
        if not self.residues:
            raise EmptyTranslationError(self.id)
    
    @property
    def residues(self) -> str:
        """Sequence with all whitespace removed."""
        return _WHITESPACE.sub("", self.sequence)
    