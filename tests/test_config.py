"""Tests for environment resolution."""
from desktop_setup.config import resolve_config


class TestResolveConfig:
    def test_xdg_default_under_home(self):
        cfg = resolve_config({"HOME": "/home/alice", "USER": "alice"})

        assert cfg.home == "/home/alice"
        assert cfg.user == "alice"
        assert cfg.config_home == "/home/alice/.config"
        assert cfg.debian_version is None

    def test_explicit_xdg(self):
        cfg = resolve_config({"HOME": "/home/alice", "USER": "alice", "XDG_CONFIG_HOME": "/srv/cfg"})

        assert cfg.config_home == "/srv/cfg"

    def test_empty_xdg_falls_back(self):
        cfg = resolve_config({"HOME": "/home/bo", "USER": "bo", "XDG_CONFIG_HOME": ""})

        assert cfg.config_home == "/home/bo/.config"

    def test_dry_run_carried(self):
        cfg = resolve_config({"HOME": "/h", "USER": "u"}, dry_run=True)

        assert cfg.dry_run is True
