# parcel_sms/fields/ignore_filter.py
from typing import Iterable, Optional


def should_ignore(message: str, ignore_keywords: Iterable[str]) -> bool:
    return first_ignored_keyword(message, ignore_keywords) is not None


def first_ignored_keyword(message: str, ignore_keywords: Iterable[str]) -> Optional[str]:
    """
    Case-insensitive substring check. Blank keywords never match, even if
    they slipped into the list.
    """
    if not message:
        return None
    haystack = message.casefold()
    for kw in ignore_keywords:
        if not kw or not kw.strip():
            continue
        if kw.casefold() in haystack:
            return kw
    return None
