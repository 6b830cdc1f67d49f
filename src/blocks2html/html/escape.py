"""Charset-aware HTML escaping for text leaves.

``& < > " '`` become ``&amp; &lt; &gt; &quot; &#039;``. Text is always
escaped as Unicode; for non-Unicode charsets the result is transcoded so that
it can be encoded in the requested charset without loss (characters the
charset lacks become numeric character references).
"""

from __future__ import annotations

import codecs
import functools

from blocks2html.diagnostics import log_fallback

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)

# Charset spellings accepted by HTML tooling that Python's codec registry lacks
_CHARSET_ALIASES = {
    "866": "cp866",
    "1251": "cp1251",
    "win-1251": "cp1251",
    "1252": "cp1252",
    "koi8r": "koi8_r",
    "koi8-ru": "koi8_u",
    "950": "cp950",
    "936": "gbk",
    "932": "cp932",
    "macroman": "mac_roman",
}

_UNICODE_CODECS = frozenset({"utf-8", "utf-16", "utf-32"})

FALLBACK_CHARSET = "utf-8"


def normalize_charset(charset: str) -> str | None:
    """Return Python's canonical codec name for ``charset``, or None if unknown."""

    name = (charset or "").strip().lower()
    name = _CHARSET_ALIASES.get(name, name)
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


@functools.lru_cache(maxsize=64)
def _resolve_codec(charset: str) -> str:
    codec = normalize_charset(charset)
    if codec is None:
        log_fallback("Escaper", "unknown charset, transcoding through utf-8", {"charset": charset})
        return FALLBACK_CHARSET
    return codec


def escape(text: str, charset: str = FALLBACK_CHARSET) -> str:
    """Escape HTML special characters in ``text`` for output in ``charset``."""

    escaped = text.translate(_ESCAPES)
    codec = _resolve_codec(charset)
    if codec in _UNICODE_CODECS:
        return escaped
    return escaped.encode(codec, errors="xmlcharrefreplace").decode(codec)


def escape_bytes(data: bytes, charset: str = FALLBACK_CHARSET) -> bytes:
    """Escape already-encoded text, keeping the byte layout of ``charset``.

    Undecodable input bytes are substituted with U+FFFD before escaping.
    """

    codec = _resolve_codec(charset)
    decoded = bytes(data).decode(codec, errors="replace")
    return decoded.translate(_ESCAPES).encode(codec, errors="xmlcharrefreplace")


__all__ = ["FALLBACK_CHARSET", "escape", "escape_bytes", "normalize_charset"]
