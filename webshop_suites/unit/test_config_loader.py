import pytest
import yaml

from webshop_suites.ui_testing.framework.config_loader import ConfigLoader, ConfigurationError


@pytest.fixture(autouse=True)
def fresh_loader():
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"ui": {"assertion_timeout_ms": 5000}, "browser": {"headless": True}}),
        encoding="utf-8",
    )

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.assertion_timeout_ms") == 5000
    assert loader.get("ui.poll_interval_ms", 100) == 100

    ConfigLoader.reset()
    monkeypatch.setenv("UI_ASSERTION_TIMEOUT_MS", "8000")
    monkeypatch.setenv("BROWSER_HEADLESS", "false")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.assertion_timeout_ms", 5000) == 8000
    assert loader.get("browser.headless", True) is False


def test_invalid_numeric_override_is_a_configuration_error(monkeypatch, tmp_path):
    monkeypatch.setenv("RUNNER_WORKERS", "many")
    loader = ConfigLoader(config_path=tmp_path / "missing.yaml")

    with pytest.raises(ConfigurationError):
        loader.get("runner.workers", 1)


def test_reload_updates_values(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"runner": {"workers": 1}}), encoding="utf-8")

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("runner.workers") == 1

    config_path.write_text(yaml.dump({"runner": {"workers": 4}}), encoding="utf-8")
    loader.reload()
    assert loader.get("runner.workers") == 4
    assert loader.get_section("runner") == {"workers": 4}


def test_shipped_config_has_ui_defaults():
    loader = ConfigLoader()
    assert loader.get_section("ui")["element_timeout_ms"] == 5000
    assert loader.get_section("browser")["type"] == "chromium"
