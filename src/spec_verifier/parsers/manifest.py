"""
JAR Manifest Parser.

Reads the main attributes section of a ``META-INF/MANIFEST.MF`` file.
Attribute names are case-insensitive.
"""

import logging

logger = logging.getLogger(__name__)


def parse_manifest(content: str) -> dict[str, str]:
    """
    Parse the main attributes of a manifest.

    Args:
        content: Decoded manifest text.

    Returns:
        Attribute name to value, in file order. A name repeated in another
        case replaces the earlier value under the first spelling. Parsing
        stops at the first blank line, where per-entry sections begin.
    """
    attributes: dict[str, str] = {}
    spellings: dict[str, str] = {}
    current: str | None = None

    for line in content.splitlines():
        if not line.strip():
            if attributes:
                break
            continue

        # Continuation lines start with exactly one space
        if line.startswith(" "):
            if current is not None:
                attributes[current] += line[1:]
            continue

        name, sep, value = line.partition(":")
        if not sep:
            logger.debug(f"Ignoring malformed manifest line: {line!r}")
            current = None
            continue
        name = name.strip()
        current = spellings.setdefault(name.lower(), name)
        attributes[current] = value.lstrip(" ")

    return attributes


def get_attribute(attributes: dict[str, str], name: str) -> str | None:
    """Look up an attribute by name, ignoring case."""
    if name in attributes:
        return attributes[name]
    wanted = name.lower()
    for key, value in attributes.items():
        if key.lower() == wanted:
            return value
    return None
