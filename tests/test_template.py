"""Tests for checklist template discovery and loading."""

from pathlib import Path

import pytest

from srpm.reviewer.checklist.template import find_template, load_checklist, parse_checklist
from srpm.reviewer.exceptions import ChecklistError, TemplateNotFoundError
from srpm.reviewer.models import ChecklistCategory


def test_parse_checklist_splits_and_keeps_order() -> None:
    rows = [
        ["MUST", "first must"],
        ["# comment", "ignored"],
        ["should", "first should"],
        ["Package MUST", "second must"],
        ["MUST"],
        [],
        ["SHOULD", "second should"],
    ]
    must, should = parse_checklist(rows)
    assert [i.text for i in must] == ["first must", "second must"]
    assert [i.text for i in should] == ["first should", "second should"]
    assert {i.category for i in must} == {ChecklistCategory.MUST}
    assert {i.category for i in should} == {ChecklistCategory.SHOULD}


def test_load_checklist_reads_quoted_csv(tmp_path: Path) -> None:
    path = tmp_path / "review.csv"
    path.write_text(
        'MUST,"The spec file must match %{name}.spec, exactly."\n'
        'SHOULD,"Man pages, if any."\n'
    )
    must, should = load_checklist(path)
    assert must[0].text == "The spec file must match %{name}.spec, exactly."
    assert should[0].text == "Man pages, if any."


def test_load_checklist_rejects_non_utf8(tmp_path: Path) -> None:
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"MUST,Paquet nomm\xe9 correctement\n")
    with pytest.raises(ChecklistError, match="Cannot read checklist"):
        load_checklist(path)


def test_find_template_search_order(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (second / "python").write_text("MUST,x\n")
    (first / "python.csv").write_text("MUST,y\n")

    assert find_template("python", [second, first]) == second / "python"
    assert find_template("python", [first, second]) == first / "python.csv"


def test_find_template_accepts_a_direct_path(tmp_path: Path) -> None:
    path = tmp_path / "custom.csv"
    path.write_text("MUST,x\n")
    assert find_template(str(path), []) == path


def test_find_template_falls_back_to_packaged_default(tmp_path: Path) -> None:
    path = find_template("default", [tmp_path])
    must, should = load_checklist(path)
    assert must and should


def test_find_template_not_found(tmp_path: Path) -> None:
    with pytest.raises(TemplateNotFoundError, match="'nope' cannot be found"):
        find_template("nope", [tmp_path])
