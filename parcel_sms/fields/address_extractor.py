# parcel_sms/fields/address_extractor.py
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional, Pattern, Tuple
import logging
import re

from parcel_sms.constants.vocabulary import (
    ADDRESS_LABELS,
    CARRIERS,
    GENERIC_LOCATION_SUFFIXES,
    LOCATION_SUFFIXES,
    LOCKER_SUFFIXES,
    PLACEMENT_VERBS,
)

logger = logging.getLogger(__name__)

# --- regexes / signals ------------------------------------------------------

def _alt(words: Iterable[str]) -> str:
    return "(?:" + "|".join(words) + ")"

SUFFIX = _alt(LOCATION_SUFFIXES)
GENERIC_SUFFIX = _alt(GENERIC_LOCATION_SUFFIXES)
SENTENCE_END = "，。！？"

# "5号柜", "A-12号丰巢柜": the token and the suffix together name the locker
LOCKER_RE = re.compile(r"([0-9A-Z-]+)号" + _alt(LOCKER_SUFFIXES), re.I)

# (a) labeled field, up to the code cue / urgency words / end of message
LABELED_RE = re.compile(
    ADDRESS_LABELS + r"[:：\s]*([^" + SENTENCE_END + r"\s]+[\s\S]*?)(?=取件码|$|请|尽快|及时)",
    re.I,
)

# (b) carrier name, optional "|" separator, then a suffix-terminated place
CARRIER_RE = re.compile(
    _alt(CARRIERS) + r"[^" + SENTENCE_END + r"]*?[|｜]?\s*"
    r"([^" + SENTENCE_END + r"\s]+?" + SUFFIX + r"[^" + SENTENCE_END + r"]*)",
    re.I,
)

# (c) "已到/位于/放入 ..." followed by a suffix-terminated place
VERB_CUE_RE = re.compile(
    _alt(PLACEMENT_VERBS) + r"\s*"
    r"([^任务" + SENTENCE_END + r"\s]+?" + SUFFIX + r"[^" + SENTENCE_END + r"]*)",
    re.I,
)

# (d) anything ending in a location noun
GENERIC_RE = re.compile(
    r"([\u4e00-\u9fa5a-zA-Z0-9\s-]+?" + GENERIC_SUFFIX + r"[^" + SENTENCE_END + r"]*)"
)

ADDRESS_PATTERNS: List[Tuple[str, Pattern]] = [
    ("labeled field", LABELED_RE),
    ("carrier prefix", CARRIER_RE),
    ("verb cue", VERB_CUE_RE),
    ("generic location", GENERIC_RE),
]

# ---------------------------------------------------------------------------

def _group_or_match(m: re.Match) -> str:
    if m.re.groups >= 1:
        return m.group(1) or ""
    return m.group(0)


def match_custom_literal(message: str, literals: Iterable[str]) -> Optional[str]:
    haystack = message.casefold()
    for lit in literals:
        if lit and lit.casefold() in haystack:
            return lit
    return None


class AddressExtractor:
    """
    extract(message, custom_literals) -> {address, evidence}
    Ordered strategies, first non-empty result wins:
      1) user literals (the literal itself is returned)
      2) locker number, whole match
      3) compound patterns: labeled field, carrier prefix, verb cue, generic
    Every strategy returns None when it has nothing, so an empty capture is
    never mistaken for a hit.
    """
    def __init__(self, patterns: Optional[List[Tuple[str, Pattern]]] = None, debug: bool = False):
        self.patterns = patterns if patterns is not None else ADDRESS_PATTERNS
        self.debug = debug

    def _locker(self, message: str) -> Optional[str]:
        m = LOCKER_RE.search(message)
        return m.group(0) if m else None

    def _compound(self, message: str) -> Optional[Tuple[str, str]]:
        for name, rx in self.patterns:
            m = rx.search(message)
            if not m:
                continue
            found = _group_or_match(m)
            if found:
                return found, name
        return None

    def _strategies(self, custom_literals: Iterable[str]) -> List[Tuple[str, Callable[[str], Optional[str]]]]:
        literals = list(custom_literals)
        return [
            ("custom literal", lambda msg: match_custom_literal(msg, literals)),
            ("locker number", self._locker),
        ]

    def extract(self, message: str, custom_literals: Iterable[str] = ()) -> Dict[str, Any]:
        for name, strategy in self._strategies(custom_literals):
            addr = strategy(message)
            if addr:
                if self.debug:
                    logger.debug("[address] via %s -> %s", name, addr)
                return {"address": addr, "evidence": name}

        hit = self._compound(message)
        if hit:
            addr, name = hit
            if self.debug:
                logger.debug("[address] via %s -> %s", name, addr)
            return {"address": addr, "evidence": name}

        if self.debug:
            logger.debug("[address] not found")
        return {"address": "", "evidence": None}


def extract_address(
    message: str,
    custom_address_patterns: Iterable[str] = (),
    builtin_patterns: Optional[List[Tuple[str, Pattern]]] = None,
) -> str:
    return AddressExtractor(builtin_patterns).extract(message, custom_address_patterns)["address"]
