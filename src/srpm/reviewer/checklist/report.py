"""Rendering and persistence of the review report."""

from pathlib import Path

import jinja2
from pyvider.telemetry import logger

from ..models import BuildOutcome, BuildTargetKind, ExtractedLayout, PackageIdentity

_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


def _get_template_env() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )


def render_summary(identity: PackageIdentity, layout: ExtractedLayout) -> str:
    """Renders the package identity and the source/patch listing."""
    template = _get_template_env().get_template("summary.txt.j2")
    return template.render(identity=identity, layout=layout)


def describe_outcome(outcome: BuildOutcome) -> str:
    """Renders the report line for one build attempt."""
    target = outcome.target
    if target.kind is BuildTargetKind.LOCAL:
        if outcome.succeeded:
            return "Package successfully built locally."
        return "Package failed to build locally!"
    where = f"{target.kind.value}, {target.identifier}"
    if outcome.succeeded:
        return f"Package successfully built in {where}."
    return f"Package failed to build in {where}."


def write_report(path: Path, text: str) -> Path:
    """Writes the review text to *path*, replacing any existing file."""
    path = Path(path)
    path.write_text(text, encoding="utf-8")
    logger.info("Review report written", path=str(path), size=len(text))
    return path
