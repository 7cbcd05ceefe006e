"""Content-equality gate between the packaged and the reference build recipe."""

from pathlib import Path

from pyvider.telemetry import logger

from ..crypto import file_digest
from ..exceptions import SpecMismatchError


def verify_spec(extracted_spec: Path, reference_spec: Path) -> str:
    """
    Confirms the recipe inside the package is byte-identical to the reference.

    Returns the shared digest. Raises SpecMismatchError carrying both digests
    when they differ; read failures propagate as OSError.
    """
    extracted_digest = file_digest(extracted_spec)
    reference_digest = file_digest(reference_spec)
    if extracted_digest != reference_digest:
        logger.error(
            "Spec digest mismatch",
            extracted=extracted_digest,
            reference=reference_digest,
        )
        raise SpecMismatchError(extracted_digest, reference_digest)
    logger.debug("Spec digests match", digest=extracted_digest)
    return extracted_digest
