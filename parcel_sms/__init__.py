from .models import ParseResult, RuleSnapshot, BatchRecord
from .RuleSet import RuleSet
from .SmsParser import SmsParser

__all__ = [
    "SmsParser",
    "RuleSet",
    "ParseResult",
    "RuleSnapshot",
    "BatchRecord",
]
