"""
The interactive review state machine.

A ReviewSession walks the reviewer through the MUST items and then the SHOULD
items of a checklist, one prompt at a time, and accumulates the textual review
log. Prompting goes through an injected input source so the state machine
never touches the terminal itself.

Backward navigation is single-step: BACK undoes exactly the previous answer in
the current group and moves the cursor back by one. At the first item of a
group BACK does nothing; it never crosses into the previous group.
"""

from collections.abc import Callable, Sequence
import enum
from typing import Literal, Self

import click
from pyvider.telemetry import logger

from ..exceptions import PromptValidationError
from ..models import ChecklistItem, ReviewRecord, Verdict

InputSource = Callable[[str, str], str]
Echo = Callable[[str], None]

BACK = "back"
DEFAULT_RESPONSE = Verdict.NOT_EVALUATED.keyword
RESPONSES: tuple[str, ...] = (*(v.keyword for v in Verdict), BACK)

LEGEND = (
    "OK -- package complies with this item",
    "FAIL -- package does not comply with this item",
    "NOTE -- a special case, described in a note",
    "NA -- this item is not applicable",
    "NE -- this item hasn't been evaluated",
    "BACK -- go to the previous question",
)
NOTES_SECTION = ("", "NOTES:", "------", "")


class ReviewGroup(enum.Enum):
    MUST = "MUST"
    SHOULD = "SHOULD"
    DONE = "DONE"

    @property
    def next(self) -> "ReviewGroup":
        if self is ReviewGroup.MUST:
            return ReviewGroup.SHOULD
        return ReviewGroup.DONE


def terminal_input(prompt_text: str, default: str) -> str:
    """Reads one response from the terminal; end of input raises EOFError."""
    choices = "/".join(r.upper() if r == default else r for r in RESPONSES)
    try:
        return click.prompt(
            f"{prompt_text} ({choices})",
            default="",
            show_default=False,
            prompt_suffix=": ",
        )
    except click.Abort:
        raise EOFError from None


class ReviewSession:
    def __init__(
        self,
        must: Sequence[ChecklistItem],
        should: Sequence[ChecklistItem],
        log: Sequence[str] = (),
        input_source: InputSource = terminal_input,
        echo: Echo = click.echo,
    ) -> None:
        self.items: dict[ReviewGroup, list[ChecklistItem]] = {
            ReviewGroup.MUST: list(must),
            ReviewGroup.SHOULD: list(should),
            ReviewGroup.DONE: [],
        }
        self.log: list[str] = list(log)
        self.records: list[ReviewRecord] = []
        self.input_source = input_source
        self.echo = echo

        self.group = ReviewGroup.MUST
        self.cursor = 0
        self.aborted = False
        self.closed = False
        self._entered = False
        self._skip_empty_groups()

    @property
    def current_items(self) -> list[ChecklistItem]:
        return self.items[self.group]

    @property
    def current_item(self) -> ChecklistItem | None:
        if self.cursor < len(self.current_items):
            return self.current_items[self.cursor]
        return None

    @property
    def finished(self) -> bool:
        return self.closed or self.aborted

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.log)

    def _skip_empty_groups(self) -> None:
        while self.group is not ReviewGroup.DONE and not self.current_items:
            self.group = self.group.next
            self.cursor = 0

    def _enter_group(self) -> None:
        title = self.group.value
        self.log.extend(["", f"{title} items:"])
        banner = f"Package {title}:"
        self.echo("")
        self.echo(banner)
        self.echo("-" * len(banner))
        self._entered = True
        logger.debug("Entered review group", group=title)

    def _close(self) -> None:
        self.log.extend(NOTES_SECTION)
        self.closed = True
        logger.info("Review finished", answered=len(self.records))

    def _read_response(self, item: ChecklistItem) -> Verdict | Literal["back"]:
        while True:
            raw = self.input_source(item.text, DEFAULT_RESPONSE).strip()
            if not raw:
                raw = DEFAULT_RESPONSE
            if raw.lower() == BACK:
                return BACK
            try:
                return Verdict.parse(raw)
            except PromptValidationError as e:
                self.echo(str(e))

    def _go_back(self) -> None:
        if self.cursor == 0:
            self.echo("Already at the first item of this group.")
            return
        self.records.pop()
        self.log.pop()
        self.cursor -= 1

    def step(self) -> bool:
        """
        Performs one prompt and its transition.

        Returns False once the session has reached DONE or has been aborted by
        end of input, True while there are items left to answer.
        """
        if self.finished:
            return False
        if self.group is ReviewGroup.DONE:
            self._close()
            return False
        if not self._entered:
            self._enter_group()

        item = self.current_items[self.cursor]
        try:
            response = self._read_response(item)
        except EOFError:
            self.aborted = True
            logger.warning(
                "Review aborted by end of input",
                group=self.group.value,
                cursor=self.cursor,
            )
            return False

        if response == BACK:
            self._go_back()
        else:
            record = ReviewRecord(item, response)
            self.records.append(record)
            self.log.append(record.render())
            self.cursor += 1

        if self.cursor == len(self.current_items):
            self.group = self.group.next
            self.cursor = 0
            self._entered = False
            self._skip_empty_groups()
            if self.group is ReviewGroup.DONE:
                self._close()
        return not self.finished

    def run(self) -> Self:
        while self.step():
            pass
        return self
