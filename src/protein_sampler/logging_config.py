"""Logging configuration and utilities."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "protein_sampler"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""
    
    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'       # Reset
    }
    
    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None,
                 use_colors: bool = True, stream=None):
        super().__init__(fmt, datefmt)
        stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()
    
    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors if enabled."""
        levelname = record.levelname
        
        if self.use_colors and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        
        result = super().format(record)
        
        # Restore original levelname for other handlers
        record.levelname = levelname
        
        return result


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    colors: bool = True,
    quiet: bool = False
) -> logging.Logger:
    """
    Configure the package logger.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that log lines are appended to
        console: Enable console output on stderr
        colors: Enable colored console output
        quiet: Suppress all but error logs to console
        
    Returns:
        The configured package logger
    """
    level = getattr(logging, log_level.upper())
    
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    
    logger.setLevel(level)
    logger.propagate = False
    
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)
    
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.ERROR if quiet else level)
        console_handler.setFormatter(ColoredFormatter(
            '%(levelname)s - %(message)s',
            use_colors=colors,
            stream=sys.stderr
        ))
        logger.addHandler(console_handler)
    
    logger.debug(f"Logging initialized - Level: {log_level}, File: {log_file}")
    
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


class LogTimer:
    """Context manager for timing pipeline stages."""
    
    def __init__(self, operation: str, logger: Optional[logging.Logger] = None):
        """
        Initialize timer.
        
        Args:
            operation: Operation description
            logger: Logger to use (defaults to the performance logger)
        """
        self.operation = operation
        self.logger = logger or get_logger('performance')
        self.start_time = None
        self.elapsed = 0.0
    
    def __enter__(self):
        self.start_time = datetime.now()
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            self.elapsed = (datetime.now() - self.start_time).total_seconds()
            if exc_type is None:
                self.logger.debug(f"{self.operation} completed in {self.elapsed:.2f}s")
            else:
                self.logger.debug(f"{self.operation} failed after {self.elapsed:.2f}s")
