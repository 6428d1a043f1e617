"""
Escaped-Unicode helpers for page tokens and POST payloads.

The search endpoint embeds its page token inside a JavaScript string, so
non-ASCII characters arrive as ``\\uXXXX`` escapes (or ``\\\\uXXXX`` when
the enclosing string was itself escaped once more).
"""

import re

_ESCAPE_RE = re.compile(r"\\u([0-9a-fA-F]{4})")
_DOUBLE_ESCAPE_RE = re.compile(r"\\\\u([0-9a-fA-F]{4})")


def encode_non_ascii(value: str) -> str:
    """Replace every character above code point 127 with a ``\\uXXXX`` escape.

    Characters outside the BMP are written as a UTF-16 surrogate pair of
    escapes, which :func:`decode_non_ascii` recombines.
    """
    out: list[str] = []
    for ch in value:
        code = ord(ch)
        if code <= 127:
            out.append(ch)
        elif code > 0xFFFF:
            code -= 0x10000
            out.append("\\u%04x\\u%04x" % (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)))
        else:
            out.append("\\u%04x" % code)
    return "".join(out)


def decode_non_ascii(value: str, double_slash: bool = False) -> str:
    """Turn ``\\uXXXX`` escapes in *value* back into characters.

    With *double_slash* the escapes are expected as ``\\\\uXXXX``.
    """
    regex = _DOUBLE_ESCAPE_RE if double_slash else _ESCAPE_RE
    decoded = regex.sub(lambda m: chr(int(m.group(1), 16)), value)
    # Join surrogate pairs into real characters; lone halves are kept
    return decoded.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )
