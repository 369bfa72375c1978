"""
Prefix to case-insensitive regexp conversion for terms aggregation includes.
"""

# Lucene regexp reserved characters
REGEX_METACHARACTERS = frozenset('.?+*|{}[]()"\\#@&<>~')

WILDCARD_SUFFIX = ".*"


def _is_ascii_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def build_pattern(prefix: str, escape: bool = False) -> str:
    """Build a regexp matching any value that starts with ``prefix``, ignoring case.

    Only ASCII letters get a case alternation; every other character is copied
    as is. With ``escape`` set, regexp metacharacters in the prefix are
    backslash-escaped so they match literally.
    """
    parts = []
    for ch in prefix:
        if _is_ascii_letter(ch):
            parts.append(f"[{ch.lower()}{ch.upper()}]")
        elif escape and ch in REGEX_METACHARACTERS:
            parts.append("\\" + ch)
        else:
            parts.append(ch)
    parts.append(WILDCARD_SUFFIX)
    return "".join(parts)
