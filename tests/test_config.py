"""
Tests for configuration validation.
"""

from marketplace import config


class TestValidateConfig:
    def test_defaults_are_valid(self):
        assert config.validate_config() == []

    def test_reports_narrow_balance_type(self, monkeypatch):
        monkeypatch.setattr(config, "BALANCE_BITS", 4)
        errors = config.validate_config()
        assert len(errors) == 1
        assert "MARKETPLACE_BALANCE_BITS" in errors[0]

    def test_reports_unknown_log_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "LOUD")
        errors = config.validate_config()
        assert errors == ["MARKETPLACE_LOG_LEVEL 'LOUD' is not a logging level"]

    def test_reports_every_problem(self, monkeypatch):
        monkeypatch.setattr(config, "BALANCE_BITS", 4)
        monkeypatch.setattr(config, "LOG_LEVEL", "LOUD")
        monkeypatch.setattr(config, "EXISTENTIAL_DEPOSIT", -1)
        monkeypatch.setattr(config, "EVENT_LOG_SIZE", 0)
        assert len(config.validate_config()) == 4
