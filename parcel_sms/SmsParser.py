# parcel_sms/SmsParser.py
import logging
from typing import Any, Dict, List, Optional

from parcel_sms.RuleSet import RuleSet
from parcel_sms.models import ParseResult, RuleSnapshot
from parcel_sms.fields.ignore_filter import first_ignored_keyword
from parcel_sms.fields.code_extractor import CodeExtractor, final_clean_code, split_codes
from parcel_sms.fields.address_extractor import AddressExtractor
from parcel_sms.fields.text_cleaner import clean_address_text, final_clean_address

logger = logging.getLogger(__name__)

DEFAULT_MAX_MESSAGE_LENGTH = 1000


def _empty_explain() -> Dict[str, Any]:
    return {
        "address": "", "code": "", "success": False,
        "address_evidence": None, "code_evidence": None,
    }


class SmsParser:
    """
    Pulls the pickup address and pickup code out of a parcel notification SMS.

        parser = SmsParser()
        parser.add_ignore_keyword("退订")
        parser.parse("您的快递已到丰巢柜，取件码：1234，请及时取件")
        # ParseResult(address='丰巢柜', code='1234', success=True)

    Order: ignore keywords -> code -> address -> cleaning. parse() never raises.
    """

    def __init__(
        self,
        debug: bool = False,
        max_message_length: Optional[int] = DEFAULT_MAX_MESSAGE_LENGTH,
        rules: Optional[RuleSet] = None,
    ):
        self.debug = debug
        self.max_message_length = max_message_length
        self.rules = rules if rules is not None else RuleSet()
        self.code_extractor = CodeExtractor(debug=debug)
        self.address_extractor = AddressExtractor(debug=debug)

    # --- parsing ---
    def parse(self, sms: str) -> ParseResult:
        res = self.explain(sms)
        return ParseResult.build(res["address"], res["code"])

    def explain(self, sms: str) -> Dict[str, Any]:
        """Same as parse(), plus which rule produced each field."""
        if not isinstance(sms, str) or not sms:
            return _empty_explain()
        try:
            return self._run(sms)
        except Exception:
            logger.exception("Failed to parse message; returning empty result")
            return _empty_explain()

    def _run(self, sms: str) -> Dict[str, Any]:
        if self.debug:
            logger.debug("Parsing: %s", sms)
        rules = self.rules.freeze()

        # plain substring scan, always over the whole message
        hit = first_ignored_keyword(sms, rules.ignore_keywords)
        if hit is not None:
            if self.debug:
                logger.debug("[ignore] keyword %r present, skipping", hit)
            return _empty_explain()

        # regex stages never see over-long input; a cut could split a code
        if self.max_message_length is not None and len(sms) > self.max_message_length:
            if self.debug:
                logger.debug("Message is %d chars, over the %d limit; skipping", len(sms), self.max_message_length)
            return _empty_explain()

        code_res = self.code_extractor.extract(sms, rules.code_patterns)
        addr_res = self.address_extractor.extract(sms, rules.address_patterns)

        code = final_clean_code(code_res["code"])
        codes = split_codes(code)

        address = ""
        if addr_res["address"]:
            address = clean_address_text(addr_res["address"], codes)
            address = final_clean_address(address, sms, codes)

        return {
            "address": address,
            "code": code,
            "success": bool(address and code),
            "address_evidence": addr_res["evidence"],
            "code_evidence": code_res["evidence"],
        }

    # --- rule management ---
    def add_custom_address_pattern(self, pattern: str) -> None:
        self.rules.add_custom_address_pattern(pattern)

    def add_custom_code_pattern(self, pattern: str) -> None:
        self.rules.add_custom_code_pattern(pattern)

    def remove_custom_address_pattern(self, pattern: str) -> None:
        self.rules.remove_custom_address_pattern(pattern)

    def remove_custom_code_pattern(self, pattern: str) -> None:
        self.rules.remove_custom_code_pattern(pattern)

    def get_custom_address_patterns(self) -> List[str]:
        return self.rules.get_custom_address_patterns()

    def get_custom_code_patterns(self) -> List[str]:
        return self.rules.get_custom_code_patterns()

    def clear_all_custom_patterns(self) -> None:
        self.rules.clear_all_custom_patterns()

    def add_ignore_keyword(self, keyword: str) -> None:
        self.rules.add_ignore_keyword(keyword)

    def remove_ignore_keyword(self, keyword: str) -> None:
        self.rules.remove_ignore_keyword(keyword)

    def get_ignore_keywords(self) -> List[str]:
        return self.rules.get_ignore_keywords()

    def clear_ignore_keywords(self) -> None:
        self.rules.clear_ignore_keywords()

    def export_rules(self) -> RuleSnapshot:
        return self.rules.export()

    def load_rules(self, snapshot: Optional[RuleSnapshot]) -> None:
        self.rules.load(snapshot)
