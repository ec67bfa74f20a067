"""Directives embedded in generated assistant text.

A directive is a bracketed token ``[<NAME>:<ID>]`` where ``ID`` is drawn from
lowercase hex digits and hyphens. The generation collaborator is only asked
(via prompt instructions) to emit at most one directive per message; the
parser never trusts that. It acts on the first well-formed occurrence and
strips every occurrence from the text shown to the user.

The parser performs no action and never guesses intent.
"""

import re
from dataclasses import dataclass

ID_CHARSET = "a-f0-9-"


@dataclass(frozen=True)
class ExtractedDirective:
    """Result of scanning one assistant message."""

    target_id: str | None
    display_text: str

    @property
    def found(self) -> bool:
        return self.target_id is not None


class DirectiveGrammar:
    """Grammar for one directive name, e.g. ``BUY_TICKET``."""

    def __init__(self, name: str):
        if not re.fullmatch(r"[A-Z][A-Z0-9_]*", name):
            raise ValueError(f"Invalid directive name: {name!r}")
        self.name = name
        self._pattern = re.compile(rf"\[{re.escape(name)}:([{ID_CHARSET}]+)\]")
        self._id_pattern = re.compile(rf"[{ID_CHARSET}]+")

    @property
    def placeholder(self) -> str:
        """Literal template used when describing the directive in prompts."""
        return f"[{self.name}:<event_id>]"

    def render(self, target_id: str) -> str:
        """Render a directive token for a concrete identifier."""
        if not self._id_pattern.fullmatch(target_id):
            raise ValueError(f"Invalid directive id: {target_id!r}")
        return f"[{self.name}:{target_id}]"

    def extract(self, content: str) -> ExtractedDirective:
        """Return the first directive id and the text with all tokens removed."""
        match = self._pattern.search(content)
        target_id = match.group(1) if match else None
        display_text = self._pattern.sub("", content).strip()
        return ExtractedDirective(target_id=target_id, display_text=display_text)


BUY_TICKET = DirectiveGrammar("BUY_TICKET")


def extract(content: str) -> tuple[str | None, str]:
    """Extract the ticket-purchase directive from an assistant message."""
    result = BUY_TICKET.extract(content)
    return result.target_id, result.display_text
