from pathlib import Path

from repoconf.config import ConfigManager
from repoconf.config import manager as manager_module


class TestConfigManager:
    """Test cases for packaged defaults and user overrides."""

    def test_packaged_repoconf_defaults(self, isolated_config):
        settings = ConfigManager().get_repoconf_settings()

        assert settings["reposdir"] == ["/etc/yum.repos.d", "/etc/distro.repos.d"]
        assert settings["repo_file_suffix"] == ".repo"

    def test_packaged_logging_config(self, isolated_config):
        logging_config = ConfigManager().get_logging_config()

        assert logging_config["version"] == 1
        assert set(logging_config["handlers"]) == {"console", "file"}
        assert logging_config["loggers"]["repoconf"]["propagate"] is False

    def test_user_overrides_replace_top_level_keys(self, isolated_config):
        (isolated_config / "repoconf.yml").write_text(
            "reposdir:\n  - /srv/repos\n", encoding="utf-8"
        )

        settings = ConfigManager().get_repoconf_settings()

        assert settings["reposdir"] == ["/srv/repos"]
        assert settings["repo_file_suffix"] == ".repo"

    def test_invalid_user_yaml_keeps_defaults(self, isolated_config, caplog):
        (isolated_config / "repoconf.yml").write_text(
            "reposdir: [unclosed\n", encoding="utf-8"
        )

        settings = ConfigManager().get_repoconf_settings()

        assert settings["reposdir"] == ["/etc/yum.repos.d", "/etc/distro.repos.d"]
        assert "Could not parse user config" in caplog.text

    def test_empty_user_file_is_ignored(self, isolated_config):
        (isolated_config / "repoconf.yml").write_text("", encoding="utf-8")
        assert ConfigManager().get_repoconf_settings()["repo_file_suffix"] == ".repo"

    def test_singleton_until_reset(self, isolated_config):
        first = ConfigManager()
        assert ConfigManager() is first

        ConfigManager.reset()
        assert ConfigManager() is not first


class TestUserConfigDir:
    """Test cases for locating the user configuration directory."""

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("REPOCONF_CONFIG_DIR", str(tmp_path))
        assert manager_module._get_user_config_dir() == tmp_path

    def test_unix_default(self, monkeypatch):
        monkeypatch.delenv("REPOCONF_CONFIG_DIR", raising=False)
        monkeypatch.setattr(manager_module.os, "name", "posix")
        assert manager_module._get_user_config_dir() == Path.home() / ".repoconf"
