"""
End-to-end tests for SmsParser.parse.
"""

import pytest

from parcel_sms import ParseResult, SmsParser


@pytest.fixture
def parser():
    return SmsParser()


class TestParseScenarios:
    """Typical delivery messages."""

    def test_locker_brand_with_code(self, parser):
        result = parser.parse("您的快递已到丰巢柜，取件码：1234，请及时取件")
        assert result.address == "丰巢柜"
        assert result.code == "1234"
        assert result.success is True

    def test_numbered_locker(self, parser):
        result = parser.parse("5号柜已到，凭code AB12取件")
        assert result == ParseResult(address="5号柜", code="AB12", success=True)

    def test_multi_code(self, parser):
        result = parser.parse("您的快递已到幸福小区3栋，取件码：123,456，请及时取件")
        assert result.address == "幸福小区3栋"
        assert result.code == "123, 456"
        assert result.codes == ["123", "456"]
        assert result.success is True

    def test_repeated_codes_collapse(self, parser):
        result = parser.parse("取件码：1234,1234,5678 已到幸福小区")
        assert result.code == "1234, 5678"
        assert result.address == "幸福小区"

    def test_labeled_address_trailing_comma_cleaned(self, parser):
        result = parser.parse("取件地址：幸福小区东门快递站，取件码1234")
        assert result == ParseResult(address="幸福小区东门快递站", code="1234", success=True)

    def test_address_never_contains_code(self, parser):
        result = parser.parse("取件地址：A区1234号门，取件码：1234")
        assert result.code == "1234"
        assert "1234" not in result.address
        assert result.address == "A区号门"

    def test_no_code_means_no_success(self, parser):
        result = parser.parse("您的包裹已到达幸福小区")
        assert result.code == ""
        assert result.success is False

    def test_deterministic(self, parser):
        msg = "您好，韵达｜幸福小区3栋菜鸟驿站，取件码 556677"
        assert parser.parse(msg) == parser.parse(msg)
        assert parser.parse(msg) == ParseResult(address="幸福小区3栋菜鸟驿站", code="556677", success=True)


class TestIgnoreKeywords:
    """Messages containing an ignore keyword are skipped entirely."""

    def test_ignored_message_is_empty(self, parser):
        parser.add_ignore_keyword("退订")
        result = parser.parse("您的快递已到丰巢柜，取件码：1234，回复退订")
        assert result == ParseResult(address="", code="", success=False)

    def test_case_insensitive(self, parser):
        parser.add_ignore_keyword("td")
        assert parser.parse("丰巢柜取件码：1234 回TD退订").success is False

    def test_removed_keyword_no_longer_ignores(self, parser):
        parser.add_ignore_keyword("退订")
        parser.remove_ignore_keyword("退订")
        assert parser.parse("您的快递已到丰巢柜，取件码：1234，回复退订").success is True


class TestCustomRules:
    """User rules take precedence over the built-in tables."""

    def test_custom_code_pattern(self, parser):
        parser.add_custom_code_pattern(r"口令[:：]?([A-Z0-9]+)")
        result = parser.parse("您的快递已到丰巢柜，取件码：1234，口令:ZX99")
        assert result.code == "ZX99"
        assert result.address == "丰巢柜"

    def test_custom_address_literal(self, parser):
        parser.add_custom_address_pattern("菜鸟驿站")
        result = parser.parse("【菜鸟驿站】取件码 8899")
        assert result == ParseResult(address="菜鸟驿站", code="8899", success=True)

    def test_date_like_custom_code_discarded(self, parser):
        parser.add_custom_code_pattern(r"(\d{4}年)")
        result = parser.parse("您的快递已到丰巢柜，2024年12月到期")
        assert result.code == ""
        assert result.address == "丰巢柜"
        assert result.success is False

    def test_invalid_code_pattern_ignored(self, parser):
        parser.add_custom_code_pattern("(abc")
        assert parser.get_custom_code_patterns() == []
        assert parser.parse("5号柜已到，凭code AB12取件").success is True

    def test_clear_all_drops_ignore_keywords_too(self, parser):
        parser.add_custom_address_pattern("东门")
        parser.add_custom_code_pattern(r"(\d+)")
        parser.add_ignore_keyword("退订")
        parser.clear_all_custom_patterns()
        assert parser.get_custom_address_patterns() == []
        assert parser.get_custom_code_patterns() == []
        assert parser.get_ignore_keywords() == []

    def test_instances_do_not_share_rules(self):
        a, b = SmsParser(), SmsParser()
        a.add_ignore_keyword("退订")
        assert b.get_ignore_keywords() == []
        msg = "您的快递已到丰巢柜，取件码：1234，回复退订"
        assert a.parse(msg).success is False
        assert b.parse(msg).success is True


class TestRobustness:
    """parse() always returns a result."""

    def test_empty_and_none(self, parser):
        assert parser.parse("") == ParseResult()
        assert parser.parse(None) == ParseResult()

    def test_internal_error_swallowed(self, parser, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")
        monkeypatch.setattr(parser.code_extractor, "extract", boom)
        assert parser.parse("5号柜已到，凭code AB12取件") == ParseResult()

    def test_length_cap_skips_long_message(self):
        msg = "x" * 988 + "5号柜，取件码：12345678"
        capped = SmsParser().parse(msg)
        assert capped == ParseResult()
        uncapped = SmsParser(max_message_length=None).parse(msg)
        assert uncapped.code == "12345678"

    def test_length_cap_never_reports_partial_code(self):
        msg = "5号柜已到" + "。" * 20 + "取件码：12345678"
        result = SmsParser(max_message_length=len(msg) - 4).parse(msg)
        assert result.code == ""
        assert result.success is False

    def test_message_at_cap_is_parsed(self):
        msg = "5号柜已到，凭code AB12取件"
        result = SmsParser(max_message_length=len(msg)).parse(msg)
        assert result == ParseResult(address="5号柜", code="AB12", success=True)

    def test_ignore_keyword_past_cap(self, parser):
        parser.add_ignore_keyword("退订")
        msg = "5号柜已到，取件码：1234，" + "a" * 1000 + "回复退订"
        assert parser.parse(msg) == ParseResult()
        assert SmsParser(max_message_length=None, rules=parser.rules).parse(msg) == ParseResult()

    def test_explain_reports_evidence(self, parser):
        res = parser.explain("5号柜已到，凭code AB12取件")
        assert res["address_evidence"] == "locker number"
        assert res["code_evidence"] == "builtin pattern"
        assert res["success"] is True
