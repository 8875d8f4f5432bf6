"""Tests for the snap AppList step."""
import dataclasses
import logging

import pytest

from desktop_setup.lib.command import CommandError
from desktop_setup.logging_utils import SUCCESS
from desktop_setup.steps import SnapAppsStep

SNAP_HEADER = "Name      Version    Rev    Tracking       Publisher   Notes\n"


def snap_list(*names):
    rows = "".join(f"{n}  1.0  100  latest/stable  someone  -\n" for n in names)
    return SNAP_HEADER + rows


def install_events(records):
    """(kind, app) pairs in log order for install invocations and their results."""
    out = []
    for r in records:
        msg = r.getMessage()
        if msg.startswith("CMD snap install"):
            out.append(("install", msg.rsplit(" ", 1)[-1]))
        elif r.levelno == SUCCESS and msg.endswith("installed successfully"):
            out.append(("success", msg.split(" ", 1)[0]))
    return out


class TestSnapAppsStep:
    def test_installs_all_missing_in_order(self, ctx, fake_commands, caplog):
        caplog.set_level(logging.INFO)
        fake_commands.on("snap", "list", stdout=snap_list("core22", "snapd"))
        step = SnapAppsStep(step_id="70_snap_apps", apps=["nvim", "alacritty", "tmux"])

        step.apply(ctx)

        installs = fake_commands.matching("snap", "install")
        assert installs == [
            ["snap", "install", "--classic", "nvim"],
            ["snap", "install", "--classic", "alacritty"],
            ["snap", "install", "--classic", "tmux"],
        ]
        assert install_events(caplog.records) == [
            ("install", "nvim"),
            ("success", "nvim"),
            ("install", "alacritty"),
            ("success", "alacritty"),
            ("install", "tmux"),
            ("success", "tmux"),
        ]

    def test_skips_already_installed(self, ctx, fake_commands, caplog):
        caplog.set_level(logging.INFO)
        fake_commands.on("snap", "list", stdout=snap_list("core22", "tmux"))
        step = SnapAppsStep(step_id="70_snap_apps", apps=["nvim", "alacritty", "tmux"])

        step.apply(ctx)

        assert [c[-1] for c in fake_commands.matching("snap", "install")] == ["nvim", "alacritty"]
        already = [
            r for r in caplog.records if r.levelno == logging.INFO and r.getMessage().endswith("is already installed")
        ]
        assert [r.getMessage() for r in already] == ["tmux is already installed"]

    def test_prefix_of_installed_name_is_not_a_match(self, ctx, fake_commands):
        fake_commands.on("snap", "list", stdout=snap_list("nvim-something", "tmux-plugins"))
        step = SnapAppsStep(step_id="70_snap_apps", apps=["nvim", "tmux"])

        step.apply(ctx)

        assert [c[-1] for c in fake_commands.matching("snap", "install")] == ["nvim", "tmux"]

    def test_second_run_installs_nothing(self, ctx, fake_commands):
        fake_commands.on("snap", "list", stdout=snap_list("nvim", "alacritty", "tmux"))
        step = SnapAppsStep(step_id="70_snap_apps", apps=["nvim", "alacritty", "tmux"])

        step.apply(ctx)

        assert fake_commands.matching("snap", "install") == []

    def test_failed_install_raises(self, ctx, fake_commands):
        fake_commands.on("snap", "list", stdout=SNAP_HEADER)
        fake_commands.on("snap", "install", returncode=1, stderr="error: snap not found")
        step = SnapAppsStep(step_id="70_snap_apps", apps=["nvim"])

        with pytest.raises(CommandError, match="snap install --classic nvim"):
            step.apply(ctx)

    def test_sudo_prefix(self, ctx, fake_commands):
        ctx.config = dataclasses.replace(ctx.config, sudo=True)
        fake_commands.on("snap", "list", stdout=SNAP_HEADER)

        SnapAppsStep(step_id="70_snap_apps", apps=["tmux"], classic=False).apply(ctx)

        assert fake_commands.matching("sudo", "snap") == [["sudo", "snap", "install", "tmux"]]
