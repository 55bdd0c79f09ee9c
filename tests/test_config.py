"""
Legacy Guard Configuration Tests
"""

import json
import logging

import pytest

from legacy_guard.config import LogConfig, ValidatorConfig, setup_logging
from legacy_guard.constants import APP_VK
from legacy_guard.core.types import Hash


class TestValidatorConfig:
    """Tests for ValidatorConfig."""

    def test_defaults_match_contract(self):
        """Test defaults leave both trust boundaries external."""
        config = ValidatorConfig()
        assert config.require_authorization is False
        assert config.require_height_attestation is False
        assert config.reject_zero_timeout is False
        assert config.validate() == []

    def test_app(self):
        """Test the configured app identity."""
        app = ValidatorConfig().app
        assert app.vk == Hash.from_hex(APP_VK)
        assert app.identity == Hash.zero()
        assert app.tag == "n"

    def test_strict(self):
        config = ValidatorConfig.strict()
        assert config.require_authorization is True
        assert config.require_height_attestation is True

    def test_validate_bad_hex(self):
        config = ValidatorConfig(app_vk="xyz")
        errors = config.validate()
        assert any("app_vk" in e for e in errors)

    def test_validate_wrong_length(self):
        config = ValidatorConfig(app_identity="00" * 31)
        assert any("app_identity" in e for e in config.validate())

    def test_validate_tag_and_level(self):
        config = ValidatorConfig(app_tag="nn")
        config.log.level = "CHATTY"
        errors = config.validate()
        assert len(errors) == 2

    def test_save_and_load(self, tmp_path):
        """Test configuration survives a JSON file."""
        path = tmp_path / "validator.json"
        config = ValidatorConfig(require_authorization=True)
        config.log.level = "DEBUG"
        config.save(str(path))

        data = json.loads(path.read_text())
        assert data["require_authorization"] is True

        loaded = ValidatorConfig.load(str(path))
        assert loaded.require_authorization is True
        assert loaded.require_height_attestation is False
        assert loaded.log.level == "DEBUG"
        assert loaded.to_dict() == config.to_dict()

    def test_reject_zero_timeout_round_trip(self, tmp_path):
        """Test the zero-timeout flag is saved and loaded."""
        path = tmp_path / "zero.json"
        ValidatorConfig(reject_zero_timeout=True).save(str(path))
        assert json.loads(path.read_text())["reject_zero_timeout"] is True
        assert ValidatorConfig.load(str(path)).reject_zero_timeout is True

    def test_load_partial(self, tmp_path):
        """Test missing keys fall back to defaults."""
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"require_height_attestation": True}))
        loaded = ValidatorConfig.load(str(path))
        assert loaded.require_height_attestation is True
        assert loaded.app_vk == APP_VK
        assert loaded.log == LogConfig()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_stream_only(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: captured.update(kw))

        setup_logging(LogConfig(level="debug"))

        assert captured["level"] == logging.DEBUG
        assert len(captured["handlers"]) == 1

    def test_with_file(self, monkeypatch, tmp_path):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: captured.update(kw))

        setup_logging(LogConfig(file=str(tmp_path / "guard.log")))

        assert captured["level"] == logging.INFO
        assert len(captured["handlers"]) == 2
        for handler in captured["handlers"]:
            handler.close()
