"""Tests for downloaded vendor installer scripts."""
import hashlib
import logging
from pathlib import Path

import pytest

from desktop_setup.lib.command import CommandError
from desktop_setup.lib.download import ChecksumMismatch, run_installer_script, verify_sha256
from desktop_setup.steps import InstallerScriptStep

SCRIPT = b"#!/bin/sh\necho installing\n"
SCRIPT_SHA256 = hashlib.sha256(SCRIPT).hexdigest()


def fake_curl(argv):
    # curl -fsSL -o <dest> <url>
    Path(argv[argv.index("-o") + 1]).write_bytes(SCRIPT)


class TestVerifySha256:
    def test_match_returns_digest(self, tmp_path):
        p = tmp_path / "install.sh"
        p.write_bytes(SCRIPT)

        assert verify_sha256(str(p), SCRIPT_SHA256.upper()) == SCRIPT_SHA256

    def test_mismatch_raises(self, tmp_path):
        p = tmp_path / "install.sh"
        p.write_bytes(SCRIPT)

        with pytest.raises(ChecksumMismatch):
            verify_sha256(str(p), "0" * 64)


class TestRunInstallerScript:
    def test_pinned_script_runs_from_file(self, fake_commands):
        fake_commands.on("curl", effect=fake_curl)

        digest = run_installer_script("https://starship.rs/install.sh", args=["-y"], expected_sha256=SCRIPT_SHA256)

        assert digest == SCRIPT_SHA256
        runs = fake_commands.matching("sh")
        assert len(runs) == 1
        assert runs[0][1].endswith("install.sh")
        assert runs[0][2:] == ["-y"]

    def test_mismatch_never_executes(self, fake_commands):
        fake_commands.on("curl", effect=fake_curl)

        with pytest.raises(ChecksumMismatch):
            run_installer_script("https://dl.brave.com/install.sh", expected_sha256="f" * 64)

        assert fake_commands.matching("sh") == []

    def test_unpinned_logs_warning(self, fake_commands, caplog):
        caplog.set_level(logging.INFO)
        fake_commands.on("curl", effect=fake_curl)

        run_installer_script("https://dl.brave.com/install.sh")

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any("unverified" in w and SCRIPT_SHA256 in w for w in warnings)
        assert len(fake_commands.matching("sh")) == 1

    def test_download_failure_raises(self, fake_commands):
        fake_commands.on("curl", returncode=22)

        with pytest.raises(CommandError):
            run_installer_script("https://dl.brave.com/install.sh")

        assert fake_commands.matching("sh") == []


class TestInstallerScriptStep:
    def test_satisfied_when_binary_on_path(self, ctx, on_path):
        on_path.add("starship")
        step = InstallerScriptStep(step_id="71_starship", label="Starship", url="https://starship.rs/install.sh", binary="starship")

        assert step.is_satisfied(ctx) is True

    def test_not_satisfied_without_binary(self, ctx, on_path):
        step = InstallerScriptStep(step_id="61_xodo", label="Xodo", url="https://example.invalid/x.sh")

        assert step.is_satisfied(ctx) is False

    def test_apply_runs_script(self, ctx, fake_commands):
        fake_commands.on("curl", effect=fake_curl)
        step = InstallerScriptStep(
            step_id="71_starship",
            label="Starship",
            url="https://starship.rs/install.sh",
            args=["-y"],
            sha256=SCRIPT_SHA256,
        )

        step.apply(ctx)

        assert fake_commands.matching("curl")[0][-1] == "https://starship.rs/install.sh"
        assert fake_commands.matching("sh")[0][-1] == "-y"
