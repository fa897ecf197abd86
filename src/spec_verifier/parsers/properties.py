"""
Java Properties Parser.

Reads and writes the ``key=value`` format used by ``pom.properties`` files
and by spec declaration files.
"""

import re

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATOR_RE = re.compile(r"(?<!\\)(?:\\\\)*[=:\s]")


def parse_properties(content: str) -> dict[str, str]:
    """
    Parse properties text.

    Supports ``#`` and ``!`` comments, ``=``, ``:`` or whitespace
    separators, backslash line continuation and the standard escapes.
    """
    result: dict[str, str] = {}
    for line in _logical_lines(content):
        match = _SEPARATOR_RE.search(line)
        if not match:
            result[_unescape(line)] = ""
            continue

        split = match.end() - 1
        key = line[:split]
        rest = line[split:].lstrip(" \t\f")
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip(" \t\f")
        result[_unescape(key)] = _unescape(rest)
    return result


def format_properties(values: dict[str, str]) -> str:
    """Render a mapping as properties text, one ``key=value`` per line."""
    lines = [f"{_escape(key, is_key=True)}={_escape(value)}" for key, value in values.items()]
    return "\n".join(lines) + "\n"


def _logical_lines(content: str):
    pending = ""
    for raw in content.splitlines():
        line = raw.lstrip(" \t\f")
        if not pending and (not line or line[0] in "#!"):
            continue
        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        yield pending + line
        pending = ""
    if pending:
        yield pending


def _unescape(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 == len(text):
            out.append(char)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and re.fullmatch(r"[0-9a-fA-F]{4}", text[i + 2 : i + 6]):
            out.append(chr(int(text[i + 2 : i + 6], 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _escape(text: str, is_key: bool = False) -> str:
    text = text.replace("\\", "\\\\").replace("\n", "\\n").replace("\t", "\\t")
    if is_key:
        text = re.sub(r"([=:\s])", r"\\\1", text)
    return text
