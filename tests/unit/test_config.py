"""
Unit tests for configuration loading.
"""

import pydantic
import pytest

from pagefuse.config import AssetsConfig, Config, LazyConfig, MonitoringConfig, ProviderConfig, settings
from pagefuse.config.config import FIRECRAWL_SCRAPE_ENDPOINT


@pytest.fixture
def fresh_settings():
    LazyConfig.reset()
    yield settings
    LazyConfig.reset()


class TestDefaults:
    def test_provider_defaults(self):
        config = ProviderConfig()
        assert config.api_key == ""
        assert config.endpoint == FIRECRAWL_SCRAPE_ENDPOINT
        assert config.wait_for_ms == 5000
        assert config.timeout_ms == 60000
        assert config.max_age_ms == 3600000
        assert config.request_timeout == pytest.approx(75.0)

    def test_assets_defaults_to_in_process(self):
        assert AssetsConfig().base_url is None

    def test_base_url_normalised(self):
        assert AssetsConfig(base_url="http://assets:3001/").base_url == "http://assets:3001"
        assert AssetsConfig(base_url="").base_url is None

    def test_negative_wait_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ProviderConfig(wait_for_ms=-1)

    def test_log_file_parent_created(self, tmp_path):
        log_file = tmp_path / "logs" / "nested" / "pagefuse.log"
        config = MonitoringConfig(log_file=log_file)
        assert config.log_file == str(log_file)
        assert log_file.parent.is_dir()


class TestEnvironment:
    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-123")
        assert Config().provider.api_key == "fc-123"

    def test_nested_override(self, monkeypatch):
        monkeypatch.setenv("PAGEFUSE_PROVIDER__WAIT_FOR_MS", "100")
        monkeypatch.setenv("PAGEFUSE_WEB__PORT", "9100")
        monkeypatch.setenv("PAGEFUSE_ASSETS__BASE_URL", "http://assets:3001/")

        config = Config()

        assert config.provider.wait_for_ms == 100
        assert config.web.port == 9100
        assert config.assets.base_url == "http://assets:3001"


class TestYaml:
    def test_from_yaml(self, tmp_path):
        path = tmp_path / "pagefuse.yaml"
        path.write_text(
            "provider:\n  api_key: yaml-key\n  only_main_content: true\n"
            "web:\n  port: 8123\n"
            "monitoring:\n  log_level: DEBUG\n",
            encoding="utf-8",
        )

        config = Config.from_yaml(path)

        assert config.provider.api_key == "yaml-key"
        assert config.provider.only_main_content is True
        assert config.web.port == 8123
        assert config.monitoring.log_level == "DEBUG"

    def test_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert Config.from_yaml(path).web.port == 8000

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "absent.yaml")


class TestLazyConfig:
    def test_loads_from_config_env(self, tmp_path, monkeypatch, fresh_settings):
        path = tmp_path / "custom.yaml"
        path.write_text("web:\n  port: 8555\n", encoding="utf-8")
        monkeypatch.setenv("PAGEFUSE_CONFIG", str(path))

        assert fresh_settings.web.port == 8555

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, monkeypatch, fresh_settings):
        path = tmp_path / "bad.yaml"
        path.write_text("web:\n  port: not-a-port\n", encoding="utf-8")
        monkeypatch.setenv("PAGEFUSE_CONFIG", str(path))

        assert fresh_settings.web.port == 8000
