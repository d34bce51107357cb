"""Shared test fixtures for stemforge."""

from __future__ import annotations

import subprocess
import tarfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from stemforge.config import BuilderSettings
from stemforge.core.commands import CommandError


class StubDriver:
    """VmDriver double: records calls, writes a box on export."""

    def __init__(self, workdir: Path, *, fail_build: bool = False, fail_export: bool = False) -> None:
        self.workdir = workdir
        self.fail_build = fail_build
        self.fail_export = fail_export
        self.calls: list[tuple[str, str]] = []

    @property
    def called(self) -> list[str]:
        return [op for op, _ in self.calls]

    def build(self, name: str) -> None:
        self.calls.append(("build", name))
        if self.fail_build:
            raise CommandError(["veewee", "vbox", "build", name], 1, "", "build failed")

    def export(self, name: str) -> None:
        self.calls.append(("export", name))
        if self.fail_export:
            raise CommandError(["vagrant", "basebox", "export", name], 1, "", "export failed")
        write_box(self.workdir / f"{name}.box")

    def destroy(self, name: str) -> None:
        self.calls.append(("destroy", name))


class FakeRunner:
    """Stands in for ``run_command``; records every command it is given."""

    def __init__(self, returncodes: dict[str, int] | None = None) -> None:
        self.returncodes = returncodes or {}
        self.commands: list[dict[str, Any]] = []

    def __call__(
        self,
        command: Sequence[str],
        *,
        cwd: str | Path | None = None,
        env: Any = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        command = list(command)
        self.commands.append({"command": command, "cwd": cwd, "check": check})
        returncode = 0
        for needle, code in self.returncodes.items():
            if needle in command:
                returncode = code
        if check and returncode != 0:
            raise CommandError(command, returncode, "", "fake failure")
        return subprocess.CompletedProcess(command, returncode, "", "")


def write_box(box_path: Path) -> Path:
    """Write a gzip tarball shaped like a vagrant box export."""
    staging = box_path.parent / "_box_src"
    staging.mkdir(parents=True, exist_ok=True)
    (staging / "box.ovf").write_text("<Envelope/>\n")
    (staging / "box-disk1.vmdk").write_bytes(b"\x00" * 512)
    (staging / "Vagrantfile").write_text("Vagrant::Config.run do |config| end\n")
    with tarfile.open(box_path, "w:gz") as tar:
        for entry in sorted(staging.iterdir()):
            tar.add(entry, arcname=entry.name)
    return box_path


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def prefix(tmp_dir: Path) -> Path:
    """Staging directory for a build."""
    path = tmp_dir / "staging"
    path.mkdir()
    return path


@pytest.fixture
def agent_gem(tmp_dir: Path) -> Path:
    """A pre-built agent gem."""
    path = tmp_dir / "bosh_agent-0.7.0.gem"
    path.write_bytes(b"fake gem contents")
    return path


@pytest.fixture
def templates_root(tmp_dir: Path) -> Path:
    """Templates root with a small ``noop`` definition."""
    root = tmp_dir / "templates"
    noop = root / "noop"
    (noop / "scripts").mkdir(parents=True)
    (noop / "definition.rb.tmpl").write_text(
        "name={{ name }} type={{ type }} arch={{ architecture }} agent={{ agent_version }}\n"
    )
    (noop / "scripts" / "postinstall.sh.tmpl").write_text(
        "#!/bin/sh\necho {{ infrastructure }} {{ bosh_protocol }}\n"
    )
    (noop / "ks.cfg").write_text("static kickstart\n")
    return root


@pytest.fixture
def settings(templates_root: Path) -> BuilderSettings:
    """Settings pointing at the test templates root."""
    return BuilderSettings(templates_root=templates_root)


@pytest.fixture
def stub_driver(prefix: Path) -> StubDriver:
    return StubDriver(prefix)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def base_options(prefix: Path, agent_gem: Path) -> dict[str, Any]:
    """Minimal valid options for a ``noop`` build."""
    return {"name": "x", "prefix": str(prefix), "agent_src_path": str(agent_gem)}


@pytest.fixture
def make_driver(prefix: Path):
    """Factory fixture: build a StubDriver writing into the staging dir."""

    def _factory(**overrides: Any) -> StubDriver:
        return StubDriver(prefix, **overrides)

    return _factory


@pytest.fixture
def make_runner():
    """Factory fixture: build a FakeRunner with per-executable exit codes."""

    def _factory(returncodes: dict[str, int] | None = None) -> FakeRunner:
        return FakeRunner(returncodes)

    return _factory


@pytest.fixture
def box_writer():
    """Expose ``write_box`` to tests that need a raw box archive."""
    return write_box
