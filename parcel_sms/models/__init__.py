from .parse_result import ParseResult
from .rule_snapshot import RuleSnapshot
from .batch_record import BatchRecord

__all__ = [
    "ParseResult",
    "RuleSnapshot",
    "BatchRecord",
]
