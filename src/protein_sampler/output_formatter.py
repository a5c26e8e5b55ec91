"""FASTA output formatting for sampled proteins."""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from .error_handler import InvalidArgumentError, OutputFileError
from .models import ProteinRecord

logger = logging.getLogger(__name__)

DEFAULT_LINE_WIDTH = 60

_WHITESPACE = re.compile(r"\s+")


def wrap_sequence(sequence: str, width: int = DEFAULT_LINE_WIDTH) -> List[str]:
    """Strip all whitespace from a sequence and split it into lines of ``width``."""
    if width < 1:
        raise InvalidArgumentError(f"line width must be positive, got {width}")
    residues = _WHITESPACE.sub("", sequence)
    return [residues[i:i + width] for i in range(0, len(residues), width)]


class FastaWriter:
    """Writes protein records as multi-FASTA."""
    
    def __init__(self, line_width: int = DEFAULT_LINE_WIDTH):
        """
        Initialize the writer.
        
        Args:
            line_width: Residues per sequence line
        """
        if line_width < 1:
            raise InvalidArgumentError(f"line width must be positive, got {line_width}")
        self.line_width = line_width
    
    def format_header(self, record: ProteinRecord) -> str:
        if record.description:
            return f">{record.id} {record.description}"
        return f">{record.id}"
    
    def format_record(self, record: ProteinRecord) -> str:
        """
        Format one record: header, wrapped sequence, then a blank line.
        
        Args:
            record: Protein to format
            
        Returns:
            The record text including its trailing blank line
        """
        lines = [self.format_header(record)]
        lines.extend(wrap_sequence(record.sequence, self.line_width))
        return "\n".join(lines) + "\n\n"
    
    def write(self, records: Iterable[ProteinRecord],
              output_path: Union[str, Path]) -> int:
        """
        Write records to a FASTA file.
        
        Args:
            records: Proteins in output order
            output_path: Path to output file
            
        Returns:
            Number of records written
            
        Raises:
            OutputFileError: if the file cannot be created or written
        """
        written = 0
        try:
            with open(output_path, 'w') as f:
                for record in records:
                    f.write(self.format_record(record))
                    written += 1
        except OSError as e:
            raise OutputFileError(output_path, e.strerror or str(e)) from e
        
        logger.debug(f"Wrote {written} records to {output_path}")
        return written
