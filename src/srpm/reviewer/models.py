import enum
from pathlib import Path
from typing import Self

from attrs import define, field

from .exceptions import BuildInvocationError, PromptValidationError


@define(frozen=True, slots=True)
class PackageIdentity:
    name: str
    version: str
    release: str

    def __attrs_post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must not be empty.")

    @property
    def nvr(self) -> str:
        return f"{self.name}-{self.version}-{self.release}"

    @property
    def spec_name(self) -> str:
        return f"{self.name}.spec"


@define(frozen=True, slots=True)
class ExtractedLayout:
    spec_file: str
    sources: tuple[str, ...] = field(default=(), converter=tuple)
    patches: tuple[str, ...] = field(default=(), converter=tuple)


class BuildTargetKind(enum.Enum):
    LOCAL = "local"
    CHROOT = "mock"
    REMOTE_SCRATCH = "koji"


@define(frozen=True, slots=True)
class BuildTarget:
    kind: BuildTargetKind
    identifier: str | None = None

    def __attrs_post_init__(self) -> None:
        if self.kind is BuildTargetKind.LOCAL:
            if self.identifier is not None:
                raise ValueError("A local build takes no buildroot identifier.")
        elif not self.identifier:
            raise ValueError(f"A {self.kind.value} build needs a buildroot identifier.")

    @classmethod
    def local(cls) -> Self:
        return cls(BuildTargetKind.LOCAL)

    @classmethod
    def chroot(cls, identifier: str) -> Self:
        return cls(BuildTargetKind.CHROOT, identifier)

    @classmethod
    def remote_scratch(cls, identifier: str) -> Self:
        return cls(BuildTargetKind.REMOTE_SCRATCH, identifier)

    @property
    def label(self) -> str:
        if self.kind is BuildTargetKind.LOCAL:
            return "local"
        if self.kind is BuildTargetKind.REMOTE_SCRATCH:
            return f"{self.identifier} @ koji"
        return str(self.identifier)


@define(frozen=True, slots=True)
class BuildOutcome:
    target: BuildTarget
    succeeded: bool
    captured_stream_path: Path
    returncode: int = 0

    def raise_for_status(self) -> None:
        """Raises BuildInvocationError if the backend exited non-zero."""
        if not self.succeeded:
            raise BuildInvocationError(self.target.label, self.returncode)


class ChecklistCategory(enum.Enum):
    MUST = "MUST"
    SHOULD = "SHOULD"


@define(frozen=True, slots=True)
class ChecklistItem:
    category: ChecklistCategory
    text: str


class Verdict(enum.Enum):
    OK = "ok"
    FAIL = "fail"
    NOTE = "note"
    NOT_APPLICABLE = "na"
    NOT_EVALUATED = "ne"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def indicator(self) -> str:
        return VERDICT_INDICATORS[self]

    @classmethod
    def parse(cls, response: str) -> Self:
        try:
            return cls(response.strip().lower())
        except ValueError:
            raise PromptValidationError(response) from None


VERDICT_INDICATORS: dict[Verdict, str] = {
    Verdict.OK: "[  OK  ]",
    Verdict.FAIL: "[ FAIL ]",
    Verdict.NOTE: "[ NOTE ]",
    Verdict.NOT_APPLICABLE: "[  --  ]",
    Verdict.NOT_EVALUATED: "[  ??  ]",
}

if set(VERDICT_INDICATORS) != set(Verdict):
    raise AssertionError("Every verdict needs a display indicator.")


@define(frozen=True, slots=True)
class ReviewRecord:
    item: ChecklistItem
    verdict: Verdict

    def render(self) -> str:
        return f"{self.verdict.indicator} {self.item.text}"
