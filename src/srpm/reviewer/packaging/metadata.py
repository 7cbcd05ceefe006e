"""Package identity and member classification for source packages."""

from collections.abc import Iterable
from pathlib import PurePosixPath
import re

from pyvider.telemetry import logger

from ..exceptions import AmbiguousSpecError, IdentityParseError
from ..models import ExtractedLayout, PackageIdentity

# The name may contain dashes; version and release may not. The release keeps
# any dist tag segments, e.g. "3.fc20".
_NVR_PATTERN = re.compile(
    r"^(?P<name>.+)-(?P<version>[^-]+)-(?P<release>[^.-]+(?:\.[^.-]+)*)"
    r"\.src\.(?P<ext>[^./]+)$",
    re.DOTALL,
)
_SOURCE_TAG_PATTERN = re.compile(r"^Source\d*:\s*([^\s#]+)", re.IGNORECASE)
PATCH_SUFFIX = ".patch"


def _basename(member: str) -> str:
    return PurePosixPath(member).name


def parse_identity(archive_name: str) -> PackageIdentity:
    """Parses `<name>-<version>-<release>.src.<ext>` into a PackageIdentity."""
    match = _NVR_PATTERN.match(_basename(archive_name))
    if not match:
        raise IdentityParseError(archive_name)
    return PackageIdentity(
        name=match["name"], version=match["version"], release=match["release"]
    )


def classify_members(
    identity: PackageIdentity, members: Iterable[str]
) -> ExtractedLayout:
    """
    Partitions the archive members into the spec file, patches and sources.

    Directory entries are skipped. Exactly one `<name>.spec` must be present.
    """
    spec_candidates: list[str] = []
    sources: list[str] = []
    patches: list[str] = []

    for member in members:
        if member.endswith("/"):
            continue
        file_name = _basename(member)
        if not file_name:
            continue
        if file_name == identity.spec_name:
            spec_candidates.append(file_name)
        elif file_name.endswith(PATCH_SUFFIX):
            patches.append(file_name)
        else:
            sources.append(file_name)

    if len(spec_candidates) != 1:
        raise AmbiguousSpecError(identity.spec_name, spec_candidates)

    return ExtractedLayout(
        spec_file=spec_candidates[0], sources=sources, patches=patches
    )


def extract_metadata(
    archive_name: str, members: Iterable[str]
) -> tuple[PackageIdentity, ExtractedLayout]:
    identity = parse_identity(archive_name)
    layout = classify_members(identity, members)
    logger.info(
        "Extracted package metadata",
        nvr=identity.nvr,
        sources=len(layout.sources),
        patches=len(layout.patches),
    )
    return identity, layout


def expand_macros(value: str, identity: PackageIdentity) -> str:
    """Expands the name, version and release macros in a recipe string."""
    for macro, replacement in (
        ("name", identity.name),
        ("version", identity.version),
        ("release", identity.release),
    ):
        value = re.sub(
            rf"%(?:\{{{macro}\}}|{macro}\b)", lambda _m: replacement, value
        )
    return value


def spec_source_urls(spec_text: str, identity: PackageIdentity) -> list[str]:
    """Returns the expanded `SourceN:` locations declared by a recipe."""
    urls = []
    for line in spec_text.splitlines():
        match = _SOURCE_TAG_PATTERN.match(line)
        if match:
            urls.append(expand_macros(match.group(1), identity))
    return urls
