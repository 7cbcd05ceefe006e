"""Tests for package identity parsing and member classification."""

import pytest

from srpm.reviewer.exceptions import AmbiguousSpecError, IdentityParseError
from srpm.reviewer.models import PackageIdentity
from srpm.reviewer.packaging.metadata import (
    classify_members,
    expand_macros,
    extract_metadata,
    parse_identity,
    spec_source_urls,
)

FOO = PackageIdentity("foo", "1.2", "3.fc20")


@pytest.mark.parametrize(
    "archive_name, expected",
    [
        ("foo-1.2-3.fc20.src.rpm", ("foo", "1.2", "3.fc20")),
        ("/tmp/dl/foo-1.2-3.fc20.src.rpm", ("foo", "1.2", "3.fc20")),
        ("perl-Archive-RPM-0.07-1.el6.1.src.rpm", ("perl-Archive-RPM", "0.07", "1.el6.1")),
        ("bar-2.0-1.src.rpm", ("bar", "2.0", "1")),
    ],
)
def test_parse_identity(archive_name: str, expected: tuple[str, str, str]) -> None:
    identity = parse_identity(archive_name)
    assert (identity.name, identity.version, identity.release) == expected


@pytest.mark.parametrize(
    "archive_name",
    ["foo.src.rpm", "foo-1.2.src.rpm", "foo-1.2-3.fc20.rpm", "-1.2-3.src.rpm", "foo-1.2-.src.rpm"],
)
def test_parse_identity_rejects_malformed_names(archive_name: str) -> None:
    with pytest.raises(IdentityParseError, match="Cannot parse name-version-release"):
        parse_identity(archive_name)


def test_classify_members_partitions_in_archive_order() -> None:
    members = [
        "foo-1.2.tar.gz",
        "./0002-second.patch",
        "foo.spec",
        "sub/dir/extra-data.txt",
        "0001-fix.patch",
        "docs/",
    ]
    layout = classify_members(FOO, members)

    assert layout.spec_file == "foo.spec"
    assert layout.sources == ("foo-1.2.tar.gz", "extra-data.txt")
    assert layout.patches == ("0002-second.patch", "0001-fix.patch")
    classified = [layout.spec_file, *layout.sources, *layout.patches]
    assert len(classified) == len(set(classified)) == 5


def test_other_spec_files_are_sources() -> None:
    layout = classify_members(FOO, ["foo.spec", "bar.spec"])
    assert layout.sources == ("bar.spec",)


def test_missing_spec_is_an_error() -> None:
    with pytest.raises(AmbiguousSpecError, match="none found"):
        classify_members(FOO, ["foo-1.2.tar.gz"])


def test_duplicate_spec_is_an_error() -> None:
    with pytest.raises(AmbiguousSpecError) as excinfo:
        classify_members(FOO, ["foo.spec", "nested/foo.spec"])
    assert excinfo.value.candidates == ["foo.spec", "foo.spec"]


def test_extract_metadata_end_to_end() -> None:
    identity, layout = extract_metadata(
        "foo-1.2-3.fc20.src.rpm", ["foo.spec", "foo-1.2.tar.gz", "0001-fix.patch"]
    )
    assert identity == FOO
    assert identity.nvr == "foo-1.2-3.fc20"
    assert layout.spec_file == "foo.spec"
    assert layout.sources == ("foo-1.2.tar.gz",)
    assert layout.patches == ("0001-fix.patch",)


def test_expand_macros() -> None:
    assert expand_macros("%{name}-%version.tar.gz", FOO) == "foo-1.2.tar.gz"
    assert expand_macros("%{release}/%{nameless}", FOO) == "3.fc20/%{nameless}"


def test_spec_source_urls() -> None:
    spec_text = (
        "Name: foo\n"
        "Source0:  http://example.org/%{name}/%{name}-%{version}.tar.gz  # upstream\n"
        "Source:   local.conf\n"
        "source12: %{name}.desktop\n"
        "Patch0: 0001-fix.patch\n"
    )
    assert spec_source_urls(spec_text, FOO) == [
        "http://example.org/foo/foo-1.2.tar.gz",
        "local.conf",
        "foo.desktop",
    ]
