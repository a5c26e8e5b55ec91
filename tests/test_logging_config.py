"""Tests for logging configuration."""

import logging

from protein_sampler.logging_config import LogTimer, get_logger, setup_logging


class TestSetupLogging:
    """Test cases for logging setup."""
    
    def test_log_file_is_appended(self, temp_dir):
        log_file = temp_dir / "run.log"
        log_file.write_text("previous run\n")
        
        setup_logging(log_file=log_file, console=False)
        get_logger("cli").info("found 5 proteins")
        for handler in logging.getLogger("protein_sampler").handlers:
            handler.flush()
        
        content = log_file.read_text()
        assert content.startswith("previous run\n")
        assert "found 5 proteins" in content
    
    def test_quiet_console_shows_errors_only(self):
        logger = setup_logging(quiet=True)
        console = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        
        assert len(console) == 1
        assert console[0].level == logging.ERROR
    
    def test_handlers_replaced_on_repeat_setup(self):
        setup_logging()
        logger = setup_logging(log_level="DEBUG")
        
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
    
    def test_module_loggers_share_namespace(self):
        assert get_logger("sampler").name == "protein_sampler.sampler"


def test_log_timer_records_elapsed():
    with LogTimer("Sampling") as timer:
        pass
    assert timer.elapsed >= 0.0
