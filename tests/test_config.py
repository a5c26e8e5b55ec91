"""Tests for configuration management."""

import json

import pytest

from protein_sampler.config import Config
from protein_sampler.error_handler import InvalidArgumentError


class TestConfig:
    """Test cases for configuration management."""
    
    def test_default_config(self):
        config = Config.default()
        
        assert config.extraction.fabricate_ids is False
        assert config.extraction.file_format is None
        assert config.sampling.seed is None
        assert config.sampling.method == "auto"
        assert config.output.line_width == 60
        assert config.logging.log_file is None
        assert config.logging.level == "INFO"
    
    def test_config_from_file(self, temp_dir):
        config_file = temp_dir / "config.json"
        config_file.write_text(json.dumps({
            'sampling': {'seed': 7},
            'output': {'line_width': 80}
        }))
        
        loaded = Config.from_file(config_file)
        assert loaded.sampling.seed == 7
        assert loaded.output.line_width == 80
        assert loaded.extraction.fabricate_ids is False
    
    def test_partial_config_file(self, temp_dir):
        config_file = temp_dir / "config.json"
        config_file.write_text(json.dumps({'extraction': {'fabricate_ids': True}}))
        
        config = Config.from_file(config_file)
        
        assert config.extraction.fabricate_ids is True
        assert config.sampling.method == "auto"
    
    def test_missing_file_gives_defaults(self, temp_dir):
        config = Config.from_file(temp_dir / "absent.json")
        assert config.output.line_width == 60
    
    def test_unknown_key_rejected(self, temp_dir):
        config_file = temp_dir / "config.json"
        config_file.write_text(json.dumps({'sampling': {'sead': 1}}))
        
        with pytest.raises(InvalidArgumentError):
            Config.from_file(config_file)
    
    @pytest.mark.parametrize("payload", [
        [1, 2],
        "genbank",
        {'logging': [1]},
        {'sampling': "seed"},
    ])
    def test_wrong_shape_rejected(self, temp_dir, payload):
        config_file = temp_dir / "config.json"
        config_file.write_text(json.dumps(payload))
        
        with pytest.raises(InvalidArgumentError):
            Config.from_file(config_file)
    
    def test_cli_args_override_file(self):
        config = Config.default()
        config.sampling.seed = 1
        
        config.merge_cli_args(
            fabricate_ids=1,
            file_format="embl",
            seed=99,
            method="shuffle",
            line_width=70,
            log_file="run.log",
            log_level="DEBUG"
        )
        
        assert config.extraction.fabricate_ids is True
        assert config.extraction.file_format == "embl"
        assert config.sampling.seed == 99
        assert config.sampling.method == "shuffle"
        assert config.output.line_width == 70
        assert config.logging.log_file == "run.log"
        assert config.logging.level == "DEBUG"
    
    def test_unset_cli_args_keep_file_values(self):
        config = Config.default()
        config.extraction.fabricate_ids = True
        config.sampling.seed = 5
        
        config.merge_cli_args(fabricate_ids=None, seed=None, line_width=None)
        
        assert config.extraction.fabricate_ids is True
        assert config.sampling.seed == 5
    
    def test_fabricate_ids_zero_overrides_file(self):
        config = Config.default()
        config.extraction.fabricate_ids = True
        config.merge_cli_args(fabricate_ids=0)
        assert config.extraction.fabricate_ids is False
    
    def test_validate_accepts_defaults(self):
        Config.default().validate()
    
    @pytest.mark.parametrize("section, field, value", [
        ("extraction", "fabricate_ids", 2),
        ("extraction", "fabricate_ids", "yes"),
        ("extraction", "file_format", "fasta"),
        ("sampling", "method", "reservoir"),
        ("output", "line_width", 0),
        ("logging", "level", "LOUD"),
        ("logging", "level", 5),
    ])
    def test_validate_rejects(self, section, field, value):
        config = Config.default()
        setattr(getattr(config, section), field, value)
        
        with pytest.raises(InvalidArgumentError):
            config.validate()
