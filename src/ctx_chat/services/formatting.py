"""Markdown fragments shown in chat responses."""

NO_WORKSPACE_MESSAGE = "**Error:** No workspace folder is open. Open a project folder first."

CANCELLED_MESSAGE = "_Cancelled._"

ADD_USAGE_MESSAGE = (
    "**Usage:** `/add <type> <content>`\n\n"
    "Types: `task`, `decision`, `learning`\n\n"
    "Example: `/add task Implement user authentication`"
)

HOOK_FALLBACK_NOTE = (
    "\n> **Note:** Could not generate `.github/copilot-instructions.md`. "
    "Run `/hook copilot` manually."
)

HELP_MESSAGE = (
    "## ctx: Persistent Context for AI\n\n"
    "Available commands:\n\n"
    "| Command | Description |\n"
    "|---------|-------------|\n"
    "| `/init` | Initialize `.context/` directory |\n"
    "| `/status` | Show context summary |\n"
    "| `/agent` | Print AI-ready context packet |\n"
    "| `/drift` | Detect stale or invalid context |\n"
    "| `/recall` | Browse session history |\n"
    "| `/hook` | Generate tool integration configs |\n"
    "| `/add` | Add task, decision, or learning |\n"
    "| `/load` | Output assembled context |\n"
    "| `/compact` | Archive completed tasks |\n"
    "| `/sync` | Reconcile context with codebase |\n\n"
    "Example: `/status` or `/add task Fix login bug`"
)


def code_block(text: str) -> str:
    """Wrap text in a fenced block so the host renders it fixed-width."""
    return "```\n" + text + "\n```"


def error_block(action: str, message: str) -> str:
    """Render a failed operation.

    Args:
        action: What was attempted, completing "Failed to ..." (e.g. "get status")
        message: The failure cause's message
    """
    return f"**Error:** Failed to {action}.\n\n{code_block(message)}"
