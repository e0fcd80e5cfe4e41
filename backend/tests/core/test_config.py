"""
Tests for the global configuration helpers.
"""

import json

import pytest
from pydantic import ValidationError

from medsafe.core.config import get_config, load_config_from_file, reset_config, update_config


class TestConfigHelpers:

    def test_defaults(self):
        config = get_config()
        assert config.http.max_tries == 1
        assert config.analysis.severe_symptom_threshold == 7
        assert config.analysis.interaction_scan_limit == 5

    def test_dotted_update_and_reset(self):
        update_config(**{"analysis.severe_symptom_threshold": 9, "log_level": "DEBUG"})
        assert get_config().analysis.severe_symptom_threshold == 9
        assert get_config().log_level == "DEBUG"

        reset_config()
        assert get_config().analysis.severe_symptom_threshold == 7

    def test_invalid_update_rejected(self):
        with pytest.raises(ValidationError):
            update_config(**{"http.max_tries": 0})


class TestLoadConfigFromFile:

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "medsafe.json"
        path.write_text(json.dumps({
            "http": {"request_timeout": 3.5},
            "analysis": {"max_recommendations": 4},
        }))

        config = load_config_from_file(str(path))

        assert config is get_config()
        assert config.http.request_timeout == 3.5
        assert config.http.max_tries == 1
        assert config.analysis.max_recommendations == 4
        assert config.analysis.max_warnings == 6

    def test_invalid_file_values_rejected(self, tmp_path):
        path = tmp_path / "medsafe.json"
        path.write_text(json.dumps({"analysis": {"severe_symptom_threshold": 11}}))

        with pytest.raises(ValidationError):
            load_config_from_file(str(path))
