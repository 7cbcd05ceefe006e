"""The `srpmreview` command-line interface."""

import importlib.metadata
from pathlib import Path
import shutil
from typing import NoReturn

import click

from .checklist.report import describe_outcome, render_summary, write_report
from .checklist.session import LEGEND, NOTES_SECTION, ReviewSession, terminal_input
from .checklist.template import find_template, load_checklist
from .config import ReviewConfig
from .crypto import source_checksums
from .exceptions import ReviewToolError
from .models import BuildTarget, Verdict
from .packaging.metadata import extract_metadata, spec_source_urls
from .packaging.orchestrator import BuildOrchestrator, read_captured_output
from .packaging.reader import SourcePackageReader
from .packaging.verifier import verify_spec

try:
    __version__ = importlib.metadata.version("srpm-review")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"

EXPLODED_DIR = Path("exploded")


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="srpmreview",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """Source RPM review assistant."""
    pass


def _fail(message: str, error: Exception | None = None) -> NoReturn:
    click.secho(f"❌ {message}", fg="red", err=True)
    raise click.Abort() from error


def _echo_checksums(work_dir: Path, sources: tuple[str, ...]) -> None:
    click.echo("Sources MD5 checksum:", err=True)
    for name, digest in source_checksums(work_dir, sources).items():
        click.echo(f"{name}: {digest}", err=True)
    click.echo("-" * 25, err=True)


def _run_builds(
    orchestrator: BuildOrchestrator,
    config: ReviewConfig,
    package_name: str,
) -> list[str]:
    """Runs the confirmed build groups, returning one report line per attempt."""
    groups: list[tuple[str, bool, list[BuildTarget | None]]] = [
        ("Build the package locally?", True, [None]),
    ]
    if config.mock:
        groups.append((
            f"Build the package in {', '.join(config.mock)} mock buildroot(s)?",
            True,
            [BuildTarget.chroot(br) for br in config.mock],
        ))
    if config.koji:
        groups.append((
            f"Build the package in {', '.join(config.koji)} koji buildroot(s)?",
            False,
            [BuildTarget.remote_scratch(br) for br in config.koji],
        ))

    lines = []
    for question, default, targets in groups:
        if not click.confirm(question, default=default):
            continue
        for target in targets:
            label = target.label if target else "local"
            click.echo(f"Building ({label}) {package_name}... ", nl=False)
            outcome = orchestrator.attempt_build(target)
            if outcome.succeeded:
                click.secho(Verdict.OK.indicator, fg="green")
            else:
                click.secho(Verdict.FAIL.indicator, fg="red")
                click.echo(read_captured_output(outcome), err=True)
            lines.append(describe_outcome(outcome))
    return lines


@cli.command("review")
@click.option("-p", "--package", "package_path", help="Path to the SRPM to review.")
@click.option("-s", "--spec", "spec_path", help="Path to the Spec file to review.")
@click.option("-t", "--template", help="Checklist template to review with.")
@click.option(
    "-d",
    "--templatedir",
    "template_dirs",
    multiple=True,
    help="Directory to load the template from (repeatable).",
)
@click.option("-m", "--mock", multiple=True, help="Mock buildroot to build in (repeatable).")
@click.option("-k", "--koji", multiple=True, help="Koji buildroot to build in (repeatable).")
@click.option(
    "-c",
    "--copy/--no-copy",
    "copy_tree",
    default=None,
    help="Copy the extracted SRPM to ./exploded.",
)
@click.option("-o", "--output", help="Write the review to this file.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, resolve_path=True),
    help="Path to a srpmreview.toml file.",
)
def review_command(
    package_path: str | None,
    spec_path: str | None,
    template: str | None,
    template_dirs: tuple[str, ...],
    mock: tuple[str, ...],
    koji: tuple[str, ...],
    copy_tree: bool | None,
    output: str | None,
    config_path: str | None,
) -> None:
    """Builds a source RPM and walks through the review checklist."""
    try:
        config = ReviewConfig.load(Path(config_path) if config_path else None)
    except ReviewToolError as e:
        _fail(str(e), e)

    if template:
        config.template = template
    if template_dirs:
        config.template_dirs = list(template_dirs)
    if mock:
        config.mock = list(mock)
    if koji:
        config.koji = list(koji)
    if copy_tree is not None:
        config.copy = copy_tree
    if output:
        config.output = output

    if not package_path or not Path(package_path).is_file():
        _fail("SRPM not defined or does not exist!")
    if not spec_path or not Path(spec_path).is_file():
        _fail("Spec file not defined or does not exist!")

    try:
        template_path = find_template(config.template, config.template_search_path)
        must, should = load_checklist(template_path)

        with SourcePackageReader(Path(package_path)) as reader:
            identity, layout = extract_metadata(reader.file_name, reader.members)
            verify_spec(reader.work_dir / layout.spec_file, Path(spec_path))

            if config.copy:
                shutil.rmtree(EXPLODED_DIR, ignore_errors=True)
                shutil.copytree(reader.work_dir, EXPLODED_DIR)

            summary = render_summary(identity, layout)
            click.echo(summary, nl=False)
            _echo_checksums(reader.work_dir, layout.sources)

            orchestrator = BuildOrchestrator(reader.package_path, reader.work_dir)
            log = summary.splitlines()
            log.extend(_run_builds(orchestrator, config, reader.package_path.name))

            aborted = False
            if click.confirm(
                f"Review the package using '{template_path}' template?", default=False
            ):
                for line in LEGEND:
                    click.echo(line)
                session = ReviewSession(
                    must, should, log, input_source=terminal_input
                ).run()
                report_text = session.text
                aborted = session.aborted
            else:
                report_text = "".join(f"{line}\n" for line in (*log, *NOTES_SECTION))

        click.echo()
        report_path = write_report(Path(config.output).expanduser(), report_text)
        click.echo(f"Review output: {report_path}")
    except (ReviewToolError, OSError) as e:
        _fail(str(e), e)

    if aborted:
        _fail("Review interrupted by end of input; the partial review was saved.")


@cli.command("info")
@click.argument(
    "package_path",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
)
def info_command(package_path: str) -> None:
    """Shows the identity, contents and source checksums of a source RPM."""
    try:
        with SourcePackageReader(Path(package_path)) as reader:
            identity, layout = extract_metadata(reader.file_name, reader.members)
            click.echo(render_summary(identity, layout), nl=False)
            click.echo(f"Spec: {layout.spec_file}")
            _echo_checksums(reader.work_dir, layout.sources)
            spec_text = (reader.work_dir / layout.spec_file).read_text(errors="replace")
            for url in spec_source_urls(spec_text, identity):
                click.echo(f"Source: {url}")
    except (ReviewToolError, OSError) as e:
        _fail(str(e), e)


main = cli

if __name__ == "__main__":
    main()
