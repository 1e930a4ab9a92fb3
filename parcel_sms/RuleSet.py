# parcel_sms/RuleSet.py
import logging
import re
import threading
from typing import List, NamedTuple, Optional, Pattern, Tuple

from parcel_sms.models import RuleSnapshot

logger = logging.getLogger(__name__)


class FrozenRules(NamedTuple):
    """Immutable view handed to one parse call."""
    address_patterns: Tuple[str, ...]
    code_patterns: Tuple[Pattern, ...]
    ignore_keywords: Tuple[str, ...]


class RuleSet:
    """
    User-editable rules owned by one parser instance.

    - address patterns: plain substrings, first contained one wins
    - code patterns: regexes compiled on entry; bad ones are dropped
    - ignore keywords: substrings that make a message be skipped, no duplicates
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._address_patterns: List[str] = []
        self._code_patterns: List[Pattern] = []
        self._ignore_keywords: List[str] = []

    # --- custom address literals ---
    def add_custom_address_pattern(self, pattern: str) -> None:
        if not pattern or not pattern.strip():
            return
        with self._lock:
            self._address_patterns.append(pattern)

    def remove_custom_address_pattern(self, pattern: str) -> None:
        with self._lock:
            if pattern in self._address_patterns:
                self._address_patterns.remove(pattern)

    def get_custom_address_patterns(self) -> List[str]:
        with self._lock:
            return list(self._address_patterns)

    # --- custom code regexes ---
    def add_custom_code_pattern(self, pattern: str) -> None:
        try:
            compiled = re.compile(pattern)
        except (re.error, TypeError) as e:
            logger.warning("Ignoring invalid code pattern %r: %s", pattern, e)
            return
        with self._lock:
            self._code_patterns.append(compiled)

    def remove_custom_code_pattern(self, pattern: str) -> None:
        with self._lock:
            for i, rx in enumerate(self._code_patterns):
                if rx.pattern == pattern:
                    del self._code_patterns[i]
                    return

    def get_custom_code_patterns(self) -> List[str]:
        with self._lock:
            return [rx.pattern for rx in self._code_patterns]

    # --- ignore keywords ---
    def add_ignore_keyword(self, keyword: str) -> None:
        if not keyword or not keyword.strip():
            return
        with self._lock:
            if keyword not in self._ignore_keywords:
                self._ignore_keywords.append(keyword)

    def remove_ignore_keyword(self, keyword: str) -> None:
        with self._lock:
            if keyword in self._ignore_keywords:
                self._ignore_keywords.remove(keyword)

    def get_ignore_keywords(self) -> List[str]:
        with self._lock:
            return list(self._ignore_keywords)

    def clear_ignore_keywords(self) -> None:
        with self._lock:
            self._ignore_keywords.clear()

    # --- whole set ---
    def clear_all_custom_patterns(self) -> None:
        """Drops custom address/code rules and ignore keywords together."""
        with self._lock:
            self._address_patterns.clear()
            self._code_patterns.clear()
            self._ignore_keywords.clear()

    def freeze(self) -> FrozenRules:
        with self._lock:
            return FrozenRules(
                tuple(self._address_patterns),
                tuple(self._code_patterns),
                tuple(self._ignore_keywords),
            )

    def export(self) -> RuleSnapshot:
        frozen = self.freeze()
        return RuleSnapshot(
            address_patterns=list(frozen.address_patterns),
            code_patterns=[rx.pattern for rx in frozen.code_patterns],
            ignore_keywords=list(frozen.ignore_keywords),
        )

    def load(self, snapshot: Optional[RuleSnapshot]) -> None:
        """Replace every rule with the snapshot's, going through the normal add checks."""
        self.clear_all_custom_patterns()
        if snapshot is None:
            return
        for p in snapshot.address_patterns:
            self.add_custom_address_pattern(p)
        for p in snapshot.code_patterns:
            self.add_custom_code_pattern(p)
        for kw in snapshot.ignore_keywords:
            self.add_ignore_keyword(kw)
