"""Title fingerprint — must match the hash the question creator commits on-chain.

fingerprint = big-endian u128 of bytes 16..31 of SHA-256(UTF-8(title)).
No Unicode normalisation. Lone surrogates encode as U+FFFD, the way a
WHATWG TextEncoder does, so the function is total over str.
"""

import hashlib

_REPLACEMENT = "\ufffd"


def _utf8(title: str) -> bytes:
    try:
        return title.encode("utf-8")
    except UnicodeEncodeError:
        cleaned = "".join(
            _REPLACEMENT if 0xD800 <= ord(ch) <= 0xDFFF else ch for ch in title
        )
        return cleaned.encode("utf-8")


def title_fingerprint(title: str) -> int:
    digest = hashlib.sha256(_utf8(title)).digest()
    return int.from_bytes(digest[16:32], "big")


def format_fingerprint(fingerprint: int) -> str:
    """0x-prefixed, zero-padded to 32 hex digits (for logs and API output)."""
    return f"0x{fingerprint:032x}"
