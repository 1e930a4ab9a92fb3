# parcel_sms/fields/code_extractor.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Pattern
import logging
import re

from parcel_sms.constants.vocabulary import BRACKETS, CODE_CUES, DATE_UNITS

logger = logging.getLogger(__name__)

# --- regexes ----------------------------------------------------------------

# group 1 = cue, group 2 = one or more codes separated by commas
CODE_RE = re.compile(
    r"(" + "|".join(CODE_CUES) + r")"
    r"[：:\s]*[『「【(\[ ]*"
    r"([A-Za-z0-9\s-]{3,}(?:[，,、\s][A-Za-z0-9\s-]{3,})*)"
    r"[」』】)\]]*",
    re.I,
)

MULTI_CODE_SPLIT_RE = re.compile(r"[，,、]")
CODE_JUNK_RE = re.compile(r"[" + re.escape(BRACKETS) + r"\s]")
DATE_UNIT_RE = re.compile(r"[" + DATE_UNITS + r"]")

CODE_JOINER = ", "

# --- helpers ----------------------------------------------------------------

def clean_code_text(code: str) -> str:
    return CODE_JUNK_RE.sub("", code).strip()


def split_codes(code: str) -> List[str]:
    return [c.strip() for c in code.split(CODE_JOINER)] if code else []


def is_plausible_code(code: str) -> bool:
    # dates like "2024年" are the usual false positive
    return len(code) >= 2 and not DATE_UNIT_RE.search(code)


def final_clean_code(code: str) -> str:
    """
    Trim, drop short or date-looking candidates, dedupe keeping the first
    occurrence, and rejoin with ", ".
    """
    kept: List[str] = []
    for c in split_codes(code):
        if is_plausible_code(c) and c not in kept:
            kept.append(c)
    return CODE_JOINER.join(kept)


def _first_group(m: re.Match) -> str:
    if m.re.groups >= 1:
        return m.group(1) or ""
    return m.group(0)

# ---------------------------------------------------------------------------

class CodeExtractor:
    """
    extract(message, custom_patterns) -> {code, evidence}
    Strategy:
      1) First user pattern that matches wins (group 1, or the whole match).
      2) Otherwise the built-in cue pattern; its payload is split on commas
         and each piece is cleaned of brackets and whitespace.
    The returned code is raw: run final_clean_code() before presenting it.
    """
    def __init__(self, builtin_pattern: Pattern = CODE_RE, debug: bool = False):
        self.builtin_pattern = builtin_pattern
        self.debug = debug

    def _from_custom(self, message: str, custom_patterns: Iterable[Pattern]) -> Optional[str]:
        for rx in custom_patterns:
            m = rx.search(message)
            if m:
                if self.debug:
                    logger.debug("[code] custom pattern %r matched", rx.pattern)
                return _first_group(m)
        return None

    def _from_builtin(self, message: str) -> Optional[str]:
        m = self.builtin_pattern.search(message)
        if not m:
            return None
        raw = m.group(2) or ""
        if self.debug:
            logger.debug("[code] builtin cue %r -> payload %r", m.group(1), raw)
        return CODE_JOINER.join(clean_code_text(part) for part in MULTI_CODE_SPLIT_RE.split(raw))

    def extract(self, message: str, custom_patterns: Iterable[Pattern] = ()) -> Dict[str, Any]:
        code = self._from_custom(message, custom_patterns)
        if code:
            return {"code": code, "evidence": "custom pattern"}

        code = self._from_builtin(message)
        if code:
            return {"code": code, "evidence": "builtin pattern"}

        if self.debug:
            logger.debug("[code] not found")
        return {"code": "", "evidence": None}


def extract_code(
    message: str,
    custom_code_patterns: Iterable[Pattern] = (),
    builtin_code_pattern: Pattern = CODE_RE,
) -> str:
    return CodeExtractor(builtin_code_pattern).extract(message, custom_code_patterns)["code"]
