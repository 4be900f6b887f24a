"""Settings defaults and their hand-off to the engine."""
from config.settings import Settings
from src.pm_common.wad import WAD
from src.pm_engine.engine.params import EngineParams


class TestSettingsDefaults:
    def test_economic_defaults_are_wad_scaled(self) -> None:
        s = Settings(_env_file=None)
        assert s.CREATION_FEE == WAD // 100
        assert s.CREATOR_REWARD == 100 * WAD
        assert s.TRADE_REWARD == 10 * WAD

    def test_engine_params_match_settings(self) -> None:
        s = Settings(_env_file=None)
        assert EngineParams.from_settings(s) == EngineParams(owner=s.OWNER_ACCOUNT)

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("CREATION_FEE", str(2 * WAD))
        assert EngineParams.from_settings(Settings(_env_file=None)).creation_fee == 2 * WAD
