QUOTES = ("'", '"')

COMMENT_PREFIXES = ("#", "//")


def tokenize(line: str) -> list[str]:
    """
    Split a raw command line into positional command arguments.

    Rules:
      - Tokens are separated by spaces outside quotes; runs of spaces never
        produce empty tokens.
      - Single and double quotes group characters, spaces included. Only the
        quote character that opened a region closes it; the other one is
        literal inside it. Quote characters are never kept.
      - A backslash makes the next character literal (quotes, spaces, or a
        backslash) and is itself dropped, inside or outside quotes.
      - Quoted and unquoted segments concatenate: key"value" -> keyvalue.
      - A closed quote pair makes its token explicit, so "" yields an empty
        string argument.

    Malformed input is accepted as-is: an unterminated quote or a trailing
    backslash is dropped at end of input and whatever was accumulated is
    still returned. This function never raises.
    """
    tokens: list[str] = []
    buf: list[str] = []
    quote: str | None = None
    explicit = False
    escape = False

    for ch in line:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            escape = True
            continue

        if quote is None and ch in QUOTES:
            quote = ch
            continue

        if ch == quote:
            quote = None
            explicit = True
            continue

        if ch == " " and quote is None:
            if buf or explicit:
                tokens.append("".join(buf))
                buf.clear()
                explicit = False
            continue

        buf.append(ch)

    if buf or explicit:
        tokens.append("".join(buf))

    return tokens


def split_command(line: str) -> tuple[str, list[str]] | None:
    parts = tokenize(line)
    if not parts:
        return None
    return parts[0].upper(), parts[1:]


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIXES)


def command_lines(text: str) -> list[str]:
    """
    Extract executable command lines from a block of text.

    Each line is stripped; blank lines and comment lines (``#`` or ``//``)
    are skipped. Used for running a selection or a script file line by line.
    """
    lines = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or is_comment(line):
            continue
        lines.append(line)
    return lines
