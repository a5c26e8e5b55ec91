"""Configuration management for the protein sampler."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .error_handler import InvalidArgumentError
from .sampler import SAMPLING_METHODS

FILE_FORMATS = ("genbank", "embl")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ExtractionConfig:
    """Feature extraction settings."""
    fabricate_ids: bool = False
    file_format: Optional[str] = None  # guessed from the extension when None


@dataclass
class SamplingConfig:
    """Random sampling settings."""
    seed: Optional[int] = None
    method: str = "auto"


@dataclass
class OutputConfig:
    """FASTA output settings."""
    line_width: int = 60


@dataclass
class LoggingConfig:
    """Logging settings."""
    log_file: Optional[str] = None
    level: str = "INFO"


@dataclass
class Config:
    """Main configuration container."""
    extraction: ExtractionConfig
    sampling: SamplingConfig
    output: OutputConfig
    logging: LoggingConfig
    
    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            extraction=ExtractionConfig(),
            sampling=SamplingConfig(),
            output=OutputConfig(),
            logging=LoggingConfig()
        )
    
    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from JSON file."""
        if not path.exists():
            return cls.default()
        
        with open(path, 'r') as f:
            data = json.load(f)
        
        try:
            if not isinstance(data, dict):
                raise TypeError("top level must be a JSON object")
            sections = {}
            for name in ('extraction', 'sampling', 'output', 'logging'):
                section = data.get(name, {})
                if not isinstance(section, dict):
                    raise TypeError(f"section '{name}' must be a JSON object")
                sections[name] = section
            return cls(
                extraction=ExtractionConfig(**sections['extraction']),
                sampling=SamplingConfig(**sections['sampling']),
                output=OutputConfig(**sections['output']),
                logging=LoggingConfig(**sections['logging'])
            )
        except TypeError as e:
            raise InvalidArgumentError(f"invalid configuration file {path}: {e}") from e
    
    def merge_cli_args(self, **kwargs) -> None:
        """Merge CLI arguments into configuration; None means not given."""
        if kwargs.get('fabricate_ids') is not None:
            self.extraction.fabricate_ids = bool(kwargs['fabricate_ids'])
        if kwargs.get('file_format'):
            self.extraction.file_format = kwargs['file_format']
        
        if kwargs.get('seed') is not None:
            self.sampling.seed = kwargs['seed']
        if kwargs.get('method'):
            self.sampling.method = kwargs['method']
        
        if kwargs.get('line_width') is not None:
            self.output.line_width = kwargs['line_width']
        
        if kwargs.get('log_file'):
            self.logging.log_file = kwargs['log_file']
        if kwargs.get('log_level'):
            self.logging.level = kwargs['log_level']
    
    def validate(self) -> None:
        """Check option values before any input is read.
        
        Raises:
            InvalidArgumentError: on the first invalid value found
        """
        if self.extraction.fabricate_ids not in (0, 1):
            raise InvalidArgumentError(
                f"fabricate_ids must be either 0 or 1, got {self.extraction.fabricate_ids!r}"
            )
        self.extraction.fabricate_ids = bool(self.extraction.fabricate_ids)
        
        if self.extraction.file_format not in (None, *FILE_FORMATS):
            raise InvalidArgumentError(
                f"unsupported input format {self.extraction.file_format!r}"
            )
        if self.sampling.method not in SAMPLING_METHODS:
            raise InvalidArgumentError(
                f"unknown sampling method {self.sampling.method!r}"
            )
        if isinstance(self.output.line_width, bool) or not isinstance(self.output.line_width, int) \
                or self.output.line_width < 1:
            raise InvalidArgumentError(
                f"line_width must be a positive integer, got {self.output.line_width!r}"
            )
        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in LOG_LEVELS:
            raise InvalidArgumentError(f"unknown log level {self.logging.level!r}")


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    locations = [
        Path('.protein_sampler.json'),
        Path.home() / '.config' / 'protein_sampler' / 'config.json',
    ]
    
    for path in locations:
        if path.exists():
            return path
    
    return Path.home() / '.config' / 'protein_sampler' / 'config.json'
