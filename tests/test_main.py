"""
Tests for application wiring in main.py.
"""

import logging
from unittest.mock import patch

import pytest

import main
from nexus.config import ConfigManager

CONFIG_TOML = """
[cache]
sweep-interval = "30s"
fallback-ttl = 120

[cache.categories.SEARCH]
ttl = "2m"

[cache.categories.MAIL]
enabled = false

[logging]
level = "info"
"""


@pytest.fixture
def configFile(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def restoreRootLogger():
    rootLogger = logging.getLogger()
    savedLevel = rootLogger.level
    savedHandlers = rootLogger.handlers[:]
    yield
    rootLogger.setLevel(savedLevel)
    for handler in savedHandlers:
        if handler not in rootLogger.handlers:
            rootLogger.addHandler(handler)


class TestNexusCacheApp:
    def test_app_wiring(self, configFile):
        app = main.NexusCacheApp(configPath=str(configFile))

        service = app.cacheService
        assert service.sweeper.interval == 30.0
        assert service.cache.getCategoryStats("search")["defaultTtl"] == 120.0
        assert service.cache.getCategoryStats("mail")["enabled"] is False
        assert not service.cache.isEnabled("mail")

    @pytest.mark.asyncio
    async def test_run_stops_sweeper_on_error(self, configFile):
        app = main.NexusCacheApp(configPath=str(configFile))

        with patch("asyncio.Event.wait", side_effect=RuntimeError("stopped")):
            with pytest.raises(RuntimeError):
                await app._run()

        assert not app.cacheService.sweeper.isRunning()


class TestPrettyPrintConfig:
    def test_prints_loaded_config(self, configFile, capsys):
        main.prettyPrintConfig(ConfigManager(str(configFile)))

        output = capsys.readouterr().out
        assert "=== Nexus Cache Configuration ===" in output
        assert '"sweep-interval": "30s"' in output
