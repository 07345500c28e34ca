from ferritectl.catalog import complete
from ferritectl.commands import COMMANDS, PREFIX

try:
    import readline
except ImportError:  # not shipped on every platform; completion is then off
    readline = None


def candidates(text: str, head: str = "") -> list[str]:
    """
    Completions for the word being typed.

    ``head`` is the part of the line before that word. Only the first word
    completes: dot-commands when it starts with the prefix, server command
    names otherwise.
    """
    if head.strip():
        return []

    if text.startswith(PREFIX):
        return sorted(f"{PREFIX}{name}" for name in COMMANDS if f"{PREFIX}{name}".startswith(text))

    return complete(text)


def _readline_complete(text: str, state: int) -> str | None:
    head = readline.get_line_buffer()[:readline.get_begidx()]
    matches = candidates(text, head)
    return matches[state] if state < len(matches) else None


def install_completion() -> bool:
    if readline is None:
        return False

    readline.set_completer(_readline_complete)
    readline.set_completer_delims(" \t\n")
    readline.parse_and_bind("tab: complete")
    return True
