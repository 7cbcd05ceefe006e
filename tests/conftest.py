"""Pytest fixtures for the entire srpm-review test suite."""

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from srpm.reviewer.models import ChecklistCategory, ChecklistItem

SPEC_TEXT = """Name:           foo
Version:        1.2
Release:        3%{?dist}
Summary:        A test package
License:        MIT
URL:            http://example.org/foo
Source0:        http://example.org/%{name}/%{name}-%{version}.tar.gz # upstream
Patch0:         0001-fix.patch

%description
Test package.
"""


class FakeRunner:
    """A CommandRunner that returns scripted exit codes instead of building."""

    def __init__(self, returncodes: Iterable[int] = (), output: str = "") -> None:
        self.returncodes = list(returncodes)
        self.output = output
        self.calls: list[tuple[list[str], Path | None, Path | None]] = []

    def run(
        self,
        command: list[str],
        stdout_path: Path | None,
        stderr_path: Path | None,
    ) -> int:
        self.calls.append((command, stdout_path, stderr_path))
        for path in (stdout_path, stderr_path):
            if path is not None:
                path.write_text(self.output)
        return self.returncodes.pop(0) if self.returncodes else 0


def scripted_input(responses: Iterable[str]) -> Callable[[str, str], str]:
    """Returns an input source replaying *responses*, then signalling EOF."""
    pending = list(responses)
    prompts: list[str] = []

    def _input(prompt_text: str, default: str) -> str:
        prompts.append(prompt_text)
        if not pending:
            raise EOFError
        return pending.pop(0)

    _input.prompts = prompts  # type: ignore[attr-defined]
    return _input


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def must_items() -> list[ChecklistItem]:
    return [
        ChecklistItem(ChecklistCategory.MUST, f"must item {i}") for i in range(1, 4)
    ]


@pytest.fixture
def should_items() -> list[ChecklistItem]:
    return [
        ChecklistItem(ChecklistCategory.SHOULD, f"should item {i}") for i in range(1, 3)
    ]


@pytest.fixture
def extracted_package(tmp_path: Path) -> Path:
    """An already-extracted foo-1.2-3.fc20 source package."""
    work_dir = tmp_path / "extracted"
    work_dir.mkdir()
    (work_dir / "foo.spec").write_text(SPEC_TEXT)
    (work_dir / "foo-1.2.tar.gz").write_bytes(b"\x1f\x8bnot really a tarball")
    (work_dir / "0001-fix.patch").write_text("--- a\n+++ b\n")
    return work_dir


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """A factory fixture for fake build backends with scripted exit codes."""
    return FakeRunner


@pytest.fixture
def make_input() -> Callable[[Iterable[str]], Callable[[str, str], str]]:
    """A factory fixture for scripted reviewer input."""
    return scripted_input
