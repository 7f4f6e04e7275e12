"""
oipverify.assertion — Extract identity assertions from social post text.

A publisher proves control of an account by posting a tag of the form::

    @OpenIndexProtocol verifying "<name>" is publishing as:
    <64 lowercase hex txid>

``@OpenIndexProto`` is accepted as an abbreviation. Words are separated by a
single Unicode space-separator character; the txid follows ``as:`` after a
space, a space and a newline, or a bare newline. The name runs to the last
closing quote on its line that still lets the rest of the tag match.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Optional

from .errors import MalformedAssertion

PROTOCOL_TOKEN = "@OpenIndexProto"
PROTOCOL_SUFFIX = "col"
TXID_LENGTH = 64
_HEX = frozenset("0123456789abcdef")

# Tokens between the closing quote of the name and the txid separator.
# None marks a single space-separator character.
_HEAD = (None, "verifying", None, '"')
_TAIL = ('"', None, "is", None, "publishing", None, "as:")


@dataclass(frozen=True)
class Assertion:
    """Identity claim embedded in one social post."""
    claimed_name: str
    asserted_txid: str


def is_txid(value: str) -> bool:
    """True if ``value`` is exactly 64 lowercase hex characters."""
    return len(value) == TXID_LENGTH and all(c in _HEX for c in value)


def _is_space(ch: str) -> bool:
    return unicodedata.category(ch) == "Zs"


def _match_tokens(text: str, pos: int, tokens: tuple) -> Optional[int]:
    """Match a token sequence at ``pos``; return the end position or None."""
    for token in tokens:
        if token is None:
            if pos >= len(text) or not _is_space(text[pos]):
                return None
            pos += 1
        elif text.startswith(token, pos):
            pos += len(token)
        else:
            return None
    return pos


def _separator_ends(text: str, pos: int) -> list[int]:
    """Candidate positions after the separator that follows ``as:``."""
    ends = []
    if pos < len(text) and _is_space(text[pos]):
        if text.startswith("\n", pos + 1):
            ends.append(pos + 2)
        ends.append(pos + 1)
    elif text.startswith("\n", pos):
        ends.append(pos + 1)
    return ends


def _match_tail(text: str, quote: int) -> Optional[str]:
    """Match from the closing quote of the name through the txid."""
    pos = _match_tokens(text, quote, _TAIL)
    if pos is None:
        return None
    for start in _separator_ends(text, pos):
        candidate = text[start:start + TXID_LENGTH]
        if is_txid(candidate):
            return candidate
    return None


def _match_at(text: str, start: int) -> Optional[Assertion]:
    pos = start + len(PROTOCOL_TOKEN)
    if text.startswith(PROTOCOL_SUFFIX, pos):
        pos += len(PROTOCOL_SUFFIX)
    name_start = _match_tokens(text, pos, _HEAD)
    if name_start is None:
        return None

    line_end = text.find("\n", name_start)
    if line_end == -1:
        line_end = len(text)

    # Greedy name: try closing quotes from the right, never leaving it empty.
    quote = text.rfind('"', name_start + 1, line_end)
    while quote != -1:
        txid = _match_tail(text, quote)
        if txid is not None:
            return Assertion(claimed_name=text[name_start:quote], asserted_txid=txid)
        quote = text.rfind('"', name_start + 1, quote)
    return None


def extract_assertion(text: Optional[str]) -> Assertion:
    """Return the first well-formed assertion in ``text``.

    Raises:
        MalformedAssertion: if no complete tag is present.
    """
    if text:
        start = text.find(PROTOCOL_TOKEN)
        while start != -1:
            found = _match_at(text, start)
            if found is not None:
                return found
            start = text.find(PROTOCOL_TOKEN, start + 1)
    raise MalformedAssertion("message contents did not match expected format")
