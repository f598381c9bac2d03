"""Chat request, operation result and follow-up models."""

from dataclasses import dataclass
from enum import Enum


class CommandTag(str, Enum):
    """Closed set of operation identities a routed request can end in."""

    INIT = "init"
    STATUS = "status"
    AGENT = "agent"
    DRIFT = "drift"
    RECALL = "recall"
    HOOK = "hook"
    ADD = "add"
    LOAD = "load"
    COMPACT = "compact"
    SYNC = "sync"
    HELP = "help"
    NONE = "none"

    @classmethod
    def parse(cls, value: str | None) -> "CommandTag | None":
        """Look up a tag by its value, ignoring case and a leading slash.

        Returns:
            The matching tag, or None for empty and unknown values
        """
        if value is None:
            return None
        normalized = value.strip().lstrip("/").lower()
        for tag in cls:
            if tag.value == normalized:
                return tag
        return None


@dataclass(frozen=True)
class ChatRequest:
    """An inbound request from the host surface.

    Attributes:
        command: Explicit command tag as sent by the host, if any
        prompt: Free text typed by the user (may be empty)
    """

    command: str | None = None
    prompt: str = ""


@dataclass(frozen=True)
class OperationResult:
    """Identity of the operation a request was routed to."""

    command: CommandTag


@dataclass(frozen=True)
class Followup:
    """A suggested next request."""

    prompt: str
    command: CommandTag
