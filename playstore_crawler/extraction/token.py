"""
Page-token extraction for the streaming search endpoint.

The token sits in a JavaScript string literal of the XHR response,
between ``\\42`` (escaped double quote) delimiters and tagged with
``:S:``.  Its own escapes are doubled because of the enclosing string.
"""

import re

from playstore_crawler.codec import decode_non_ascii

PAGE_TOKEN_RE = re.compile(r"'\[.*\\42((?:.(?!\\42))*:S:.*?)\\42.*\]\\n'")


def extract_page_token(body: str) -> str:
    """Return the decoded page token from *body*, or ``""`` when the
    response carries none (end of stream)."""
    m = PAGE_TOKEN_RE.search(body)
    if not m:
        return ""
    return decode_non_ascii(m.group(1), double_slash=True)
