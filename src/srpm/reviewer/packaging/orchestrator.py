"""Core logic for building source packages by orchestrating the RPM build backends."""

from collections.abc import Iterable
import contextlib
from pathlib import Path
import subprocess
from typing import Protocol

from pyvider.telemetry import logger

from ..models import BuildOutcome, BuildTarget, BuildTargetKind

# Exit statuses a POSIX shell reports for a command it cannot find or run.
COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


class CommandRunner(Protocol):
    def run(
        self,
        command: list[str],
        stdout_path: Path | None,
        stderr_path: Path | None,
    ) -> int: ...


class SubprocessRunner:
    """Runs a backend command, redirecting its streams into capture files."""

    def run(
        self,
        command: list[str],
        stdout_path: Path | None,
        stderr_path: Path | None,
    ) -> int:
        logger.info(f"Running command: {' '.join(command)}")
        with contextlib.ExitStack() as stack:
            stdout_fh = stack.enter_context(stdout_path.open("wb")) if stdout_path else None
            stderr_fh = stack.enter_context(stderr_path.open("wb")) if stderr_path else None
            try:
                result = subprocess.run(
                    command, stdout=stdout_fh, stderr=stderr_fh, check=False
                )
            except FileNotFoundError:
                logger.error("Build backend not found", command=command[0])
                if stderr_fh:
                    stderr_fh.write(f"{command[0]}: command not found\n".encode())
                return COMMAND_NOT_FOUND
            except OSError as e:
                logger.error(
                    "Build backend cannot be executed", command=command[0], error=str(e)
                )
                if stderr_fh:
                    stderr_fh.write(f"{command[0]}: {e.strerror or e}\n".encode())
                return COMMAND_NOT_EXECUTABLE
        return result.returncode


class BuildOrchestrator:
    RESULTS_DIR_NAME = "build"

    def __init__(
        self,
        archive_path: Path,
        work_dir: Path,
        runner: CommandRunner | None = None,
    ) -> None:
        self.archive_path = Path(archive_path)
        self.work_dir = Path(work_dir)
        self.results_dir = self.work_dir / self.RESULTS_DIR_NAME
        self.runner = runner or SubprocessRunner()

    def _plan(
        self, target: BuildTarget
    ) -> tuple[list[str], Path | None, Path | None, Path]:
        """Returns the command, stdout file, stderr file and the stream to show."""
        srpm = str(self.archive_path)
        if target.kind is BuildTargetKind.LOCAL:
            stdout_path = self.results_dir / "stdout"
            stderr_path = self.results_dir / "stderr"
            command = ["rpmbuild", "--rebuild", srpm]
            return command, stdout_path, stderr_path, stderr_path

        buildroot = str(target.identifier)
        if target.kind is BuildTargetKind.CHROOT:
            stderr_path = self.results_dir / f"{buildroot}.stderr"
            command = [
                "mock", "-q",
                "-r", buildroot,
                "--resultdir", str(self.results_dir),
                srpm,
            ]
            return command, None, stderr_path, stderr_path

        prefix = f"{target.kind.value}.{buildroot}"
        stdout_path = self.results_dir / f"{prefix}.stdout"
        stderr_path = self.results_dir / f"{prefix}.stderr"
        command = ["koji", "build", "--scratch", buildroot, srpm]
        return command, stdout_path, stderr_path, stdout_path

    def attempt_build(self, target: BuildTarget | None = None) -> BuildOutcome:
        """
        Runs a single build of the package against one backend.

        `None` requests a local rebuild. The outcome mirrors the backend's exit
        status only; captured output is never inspected. Failures are returned,
        not raised, and are never retried.
        """
        target = target or BuildTarget.local()
        self.results_dir.mkdir(parents=True, exist_ok=True)

        command, stdout_path, stderr_path, captured = self._plan(target)
        logger.info(f"Building ({target.label}) {self.archive_path}")
        returncode = self.runner.run(command, stdout_path, stderr_path)

        outcome = BuildOutcome(
            target=target,
            succeeded=returncode == 0,
            captured_stream_path=captured,
            returncode=returncode,
        )
        if outcome.succeeded:
            logger.info("Build succeeded", target=target.label)
        else:
            logger.warning(
                "Build failed", target=target.label, returncode=returncode
            )
        return outcome

    def attempt_builds(
        self, targets: Iterable[BuildTarget | None]
    ) -> list[BuildOutcome]:
        """Attempts each target once, strictly in the given order."""
        return [self.attempt_build(target) for target in targets]


def read_captured_output(outcome: BuildOutcome) -> str:
    """Returns the diagnostic output captured for a build attempt."""
    path = outcome.captured_stream_path
    if not path.exists():
        return ""
    return path.read_text(errors="replace")
