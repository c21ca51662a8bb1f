"""Settings 테스트"""

from restraint_bond.config import Settings
from restraint_bond.core.bonding.config import BondConfig


class TestSettings:
    def test_defaults_match_core(self):
        settings = Settings(_env_file=None)
        assert settings.bond_config() == BondConfig()
        assert settings.TEXT_LANGUAGE == "EN"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BOND_BASE_RATE", "1.1")
        monkeypatch.setenv("BOND_ALWAYS_ALLOW_RENAMING", "true")
        monkeypatch.setenv("BOND_LEVEL_STOP_REMOVE", "10")

        config = Settings(_env_file=None).bond_config()
        assert config.base_rate == 1.1
        assert config.always_allow_renaming is True
        assert config.level_stop_remove == 10
