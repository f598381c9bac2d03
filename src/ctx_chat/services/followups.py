"""Follow-up suggestions offered after an operation."""

from ctx_chat.models.operation import CommandTag, Followup, OperationResult

_FOLLOWUPS: dict[CommandTag, tuple[Followup, ...]] = {
    CommandTag.INIT: (
        Followup("Show my context status", CommandTag.STATUS),
        Followup("Generate copilot integration", CommandTag.HOOK),
    ),
    CommandTag.STATUS: (
        Followup("Detect context drift", CommandTag.DRIFT),
        Followup("Load full context", CommandTag.LOAD),
    ),
    CommandTag.DRIFT: (
        Followup("Sync context with codebase", CommandTag.SYNC),
        Followup("Show context status", CommandTag.STATUS),
    ),
    CommandTag.HELP: (
        Followup("Initialize project context", CommandTag.INIT),
        Followup("Show context status", CommandTag.STATUS),
    ),
}


def provide_followups(result: OperationResult) -> list[Followup]:
    """Suggest next requests for the operation that just ran."""
    return list(_FOLLOWUPS.get(result.command, ()))
