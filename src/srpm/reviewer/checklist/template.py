"""Discovery and loading of review checklist templates."""

from collections.abc import Iterable
import csv
import importlib.resources
from pathlib import Path

from pyvider.telemetry import logger

from ..exceptions import ChecklistError, TemplateNotFoundError
from ..models import ChecklistCategory, ChecklistItem

TEMPLATE_SUFFIX = ".csv"


def _packaged_checklists_dir() -> Path:
    """Locates the checklists shipped inside the installed package."""
    return Path(str(importlib.resources.files("srpm.reviewer").joinpath("checklists")))


def find_template(name: str, search_dirs: Iterable[Path]) -> Path:
    """
    Resolves a template name to a file.

    Each directory is tried in order, first with the bare name and then with
    the `.csv` suffix; the packaged checklists are the last resort. A name that
    is itself an existing file path wins outright.
    """
    direct = Path(name).expanduser()
    if direct.is_file():
        return direct

    candidates = [*search_dirs, _packaged_checklists_dir()]
    for directory in candidates:
        directory = Path(directory).expanduser()
        for file_name in (name, f"{name}{TEMPLATE_SUFFIX}"):
            path = directory / file_name
            if path.is_file():
                logger.debug("Resolved checklist template", path=str(path))
                return path

    raise TemplateNotFoundError(
        f"The checklist template '{name}' cannot be found in: "
        + ", ".join(str(Path(d).expanduser()) for d in candidates)
    )


def _category_of(marker: str) -> ChecklistCategory | None:
    marker = marker.upper()
    if ChecklistCategory.MUST.value in marker:
        return ChecklistCategory.MUST
    if ChecklistCategory.SHOULD.value in marker:
        return ChecklistCategory.SHOULD
    return None


def parse_checklist(rows: Iterable[list[str]]) -> tuple[list[ChecklistItem], list[ChecklistItem]]:
    """Splits two-column rows into MUST and SHOULD items, keeping row order."""
    must: list[ChecklistItem] = []
    should: list[ChecklistItem] = []
    for row in rows:
        if len(row) < 2:
            continue
        category = _category_of(row[0])
        if category is ChecklistCategory.MUST:
            must.append(ChecklistItem(category, row[1]))
        elif category is ChecklistCategory.SHOULD:
            should.append(ChecklistItem(category, row[1]))
    return must, should


def load_checklist(path: Path) -> tuple[list[ChecklistItem], list[ChecklistItem]]:
    try:
        with Path(path).open(newline="", encoding="utf-8") as f:
            must, should = parse_checklist(csv.reader(f))
    except UnicodeDecodeError as e:
        raise ChecklistError(f"Cannot read checklist '{path}': {e}") from e
    logger.info(
        "Loaded checklist", path=str(path), must=len(must), should=len(should)
    )
    return must, should
