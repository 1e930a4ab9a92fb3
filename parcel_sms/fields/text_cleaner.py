# parcel_sms/fields/text_cleaner.py
from __future__ import annotations
from typing import Iterable, List, Optional
import re

from parcel_sms.constants.vocabulary import NOISE_WORDS, PUNCTUATION

PUNCT_RE = re.compile(r"[" + re.escape(PUNCTUATION) + r"]")
WS_RE = re.compile(r"\s+")
LEADING_JUNK_RE = re.compile(r"^[^\w\u4e00-\u9fa5]+", re.ASCII)

# last resort when cleaning leaves (almost) nothing
FALLBACK_RE = re.compile(r"([\u4e00-\u9fa5]{2,}(?:驿站|柜|店|楼))")

MIN_ADDRESS_LEN = 2


def _squash(s: str) -> str:
    return WS_RE.sub(" ", s).strip()


def strip_codes(text: str, codes: Iterable[str]) -> str:
    """
    Remove every code from text. Repeats until no code is left, since a
    removal or a whitespace collapse can splice a new occurrence together.
    """
    codes = [c for c in codes if c]
    if not codes:
        return text
    while True:
        before = text
        for c in codes:
            text = text.replace(c, "")
        text = _squash(text)
        if text == before:
            return text


def strip_noise(text: str, noise_words: Iterable[str] = NOISE_WORDS) -> str:
    for w in noise_words:
        text = text.replace(w, "")
    return text


def clean_address_text(address: str, codes: List[str]) -> str:
    """First pass: codes, noise words and punctuation out, whitespace squashed."""
    if not address:
        return ""
    cleaned = strip_codes(address, codes)
    cleaned = strip_noise(cleaned)
    cleaned = PUNCT_RE.sub(" ", cleaned)
    return strip_codes(_squash(cleaned), codes)


def final_clean_address(address: str, original_sms: str, codes: Optional[List[str]] = None) -> str:
    """
    Second pass: drop leading punctuation/connector residue. When that leaves
    fewer than two characters, rescan the original message for a short
    "<name>驿站/柜/店/楼" phrase.
    """
    codes = codes or []
    cleaned = LEADING_JUNK_RE.sub("", address).strip()

    if len(cleaned) < MIN_ADDRESS_LEN:
        m = FALLBACK_RE.search(original_sms)
        if m:
            backup = strip_codes(m.group(1), codes)
            if backup:
                cleaned = backup
    return cleaned
