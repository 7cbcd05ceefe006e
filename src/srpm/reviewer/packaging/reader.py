"""Extraction of source RPMs into a temporary working directory."""

from pathlib import Path
import shutil
import subprocess
import tempfile
from types import TracebackType
from typing import Self

from pyvider.telemetry import logger

from ..exceptions import MetadataError
from ..tools import require_tool

SRPM_SUFFIX = ".src.rpm"


class SourcePackageReader:
    """Unpacks a source RPM and lists its members. Use as a context manager."""

    def __init__(self, package_path: Path) -> None:
        package_path = Path(package_path)
        if not package_path.is_file():
            raise FileNotFoundError(f"Package not found at: {package_path}")
        if not package_path.name.endswith(SRPM_SUFFIX):
            raise MetadataError(f"'{package_path}' is not a valid source RPM!")
        self.package_path = package_path.resolve()
        self.work_dir: Path | None = None
        self.members: list[str] = []

    @property
    def file_name(self) -> str:
        return self.package_path.name

    def __enter__(self) -> Self:
        self.work_dir = Path(tempfile.mkdtemp(prefix="srpmreview_"))
        try:
            self.members = self._extract(self.work_dir)
        except BaseException:
            self.cleanup()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        if self.work_dir is not None:
            shutil.rmtree(self.work_dir, ignore_errors=True)
            self.work_dir = None

    def _extract(self, dest: Path) -> list[str]:
        rpm2cpio = require_tool("rpm2cpio")
        cpio = require_tool("cpio")
        logger.info(f"Extracting {self.package_path} into {dest}")

        unpack = subprocess.run(
            [str(rpm2cpio), str(self.package_path)],
            capture_output=True,
            check=False,
        )
        if unpack.returncode != 0:
            raise MetadataError(
                f"'{self.package_path}' is not a valid source RPM!\n"
                f"  Stderr: {unpack.stderr.decode(errors='replace').strip()}"
            )
        listing = subprocess.run(
            [str(cpio), "-idmuv", "--quiet"],
            input=unpack.stdout,
            cwd=dest,
            capture_output=True,
            check=False,
        )
        if listing.returncode != 0:
            raise MetadataError(
                f"Failed to unpack '{self.package_path}'.\n"
                f"  Stderr: {listing.stderr.decode(errors='replace').strip()}"
            )
        # cpio -v lists the extracted member names on stderr.
        members = [
            line.strip()
            for line in listing.stderr.decode(errors="replace").splitlines()
            if line.strip()
        ]
        return [m for m in members if (dest / m).is_file()]
