"""
Centralized content digests for the reviewer.
"""

from pathlib import Path

from cryptography.hazmat.primitives import hashes

_CHUNK_SIZE = 64 * 1024


def file_digest(path: Path) -> str:
    """Returns the hex MD5 digest of the full byte stream of *path*."""
    digest = hashes.Hash(hashes.MD5())
    with Path(path).open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            digest.update(chunk)
    return digest.finalize().hex()


def source_checksums(work_dir: Path, sources: tuple[str, ...]) -> dict[str, str]:
    """Digests each source file of an extracted package, in listing order."""
    return {name: file_digest(work_dir / name) for name in sources}
