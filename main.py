import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from parcel_sms import BatchRecord, RuleSnapshot, SmsParser
from parcel_sms.MessageLoader import MessageLoader
from parcel_sms.SmsParser import DEFAULT_MAX_MESSAGE_LENGTH


def load_rules_file(path: str) -> RuleSnapshot:
    with Path(path).open(encoding="utf-8") as f:
        return RuleSnapshot.model_validate(json.load(f))


def process_messages(messages: List[str], parser: SmsParser) -> List[BatchRecord]:
    records = []
    for msg in messages:
        res = parser.explain(msg)
        records.append(BatchRecord(message=msg, **res))
    return records


def summarize(records: List[BatchRecord]) -> Dict[str, Any]:
    return {
        "total": len(records),
        "success": sum(1 for r in records if r.success),
        "with_address": sum(1 for r in records if r.address),
        "with_code": sum(1 for r in records if r.code),
    }


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        description="Extract pickup address and pickup code from parcel SMS messages."
    )
    ap.add_argument(
        "-i", "--input", required=True,
        help="Messages file (.txt one per line, .csv, .xlsx or .xls)"
    )
    ap.add_argument(
        "-o", "--output", default="./output/parsed_sms.json",
        help="JSON file to write results to (default: ./output/parsed_sms.json)"
    )
    ap.add_argument(
        "-c", "--column", default="message",
        help="Column holding the message text for csv/excel input (default: message)"
    )
    ap.add_argument(
        "-r", "--rules", default=None,
        help="Rules JSON with address_patterns, code_patterns and ignore_keywords"
    )
    ap.add_argument(
        "--max-length", type=int, default=DEFAULT_MAX_MESSAGE_LENGTH,
        help=f"Skip messages longer than this many characters (default: {DEFAULT_MAX_MESSAGE_LENGTH})"
    )
    ap.add_argument(
        "-n", "--limit", type=int, default=None,
        help="Only parse the first N messages"
    )
    ap.add_argument(
        "--debug", action="store_true",
        help="Enable debug output"
    )
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        messages = MessageLoader(args.input, column=args.column).load(limit=args.limit)
        rules = load_rules_file(args.rules) if args.rules else None
    except Exception as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    parser = SmsParser(debug=args.debug, max_message_length=args.max_length)
    parser.load_rules(rules)

    print(f"📄 Parsing {len(messages)} message(s) from {args.input}...")
    records = process_messages(messages, parser)
    summary = summarize(records)

    out_path = Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(
            {"summary": summary, "results": [r.model_dump() for r in records]},
            f, ensure_ascii=False, indent=2,
        )

    print(f"✅ Parsed: {summary['success']}/{summary['total']} with address and code")
    print(f"✅ Saved results to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
