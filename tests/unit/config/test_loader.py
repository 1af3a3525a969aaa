"""Unit tests for locating configuration files."""

from pathlib import Path

import pytest

from otelkit.config.loader import config_files, get_config_dir, get_environment


class TestGetEnvironment:
    """Tests for get_environment function."""

    def test_returns_env_var_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Returns OTELKIT_ENV value when set."""
        monkeypatch.setenv("OTELKIT_ENV", "production")
        assert get_environment() == "production"

    def test_defaults_to_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults to 'development' when OTELKIT_ENV not set."""
        monkeypatch.delenv("OTELKIT_ENV", raising=False)
        assert get_environment() == "development"


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_uses_env_var_when_set(self, config_dir: Path) -> None:
        """Uses OTELKIT_CONFIG_DIR when set."""
        assert get_config_dir() == config_dir

    def test_raises_for_missing_env_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Raises error when OTELKIT_CONFIG_DIR doesn't exist."""
        monkeypatch.setenv("OTELKIT_CONFIG_DIR", str(tmp_path / "missing"))

        with pytest.raises(FileNotFoundError):
            get_config_dir()

    def test_finds_config_dir_above_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without the env var the nearest config/ upwards is used."""
        monkeypatch.delenv("OTELKIT_CONFIG_DIR")
        nested = tmp_path / "service" / "src"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert get_config_dir() == tmp_path / "config"


class TestConfigFiles:
    """Tests for config_files function."""

    def test_no_files(self, config_dir: Path) -> None:
        """An empty config directory yields no files."""
        assert config_files() == []

    def test_default_only(self, config_dir: Path) -> None:
        """default.toml is picked up on its own."""
        (config_dir / "default.toml").write_text("service_name = 'orders'")

        assert config_files() == [config_dir / "default.toml"]

    def test_environment_file_first(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The environment file comes before default.toml."""
        (config_dir / "default.toml").write_text("")
        (config_dir / "production.toml").write_text("")
        monkeypatch.setenv("OTELKIT_ENV", "production")

        assert config_files() == [config_dir / "production.toml", config_dir / "default.toml"]

    def test_environment_file_without_default(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A missing default.toml does not hide the environment file."""
        (config_dir / "staging.toml").write_text("")
        monkeypatch.setenv("OTELKIT_ENV", "staging")

        assert config_files() == [config_dir / "staging.toml"]
