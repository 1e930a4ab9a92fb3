from typing import List
from pydantic import BaseModel, model_validator
from pydantic.config import ConfigDict


class ParseResult(BaseModel):
    """Address and pickup code pulled out of a single delivery SMS."""
    address: str = ""
    code: str = ""                                    # ", "-joined when several
    success: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _success_needs_both_fields(self):
        if self.success != bool(self.address and self.code):
            raise ValueError("success must be true exactly when address and code are both set")
        return self

    @classmethod
    def build(cls, address: str, code: str) -> "ParseResult":
        return cls(address=address, code=code, success=bool(address and code))

    @classmethod
    def empty(cls) -> "ParseResult":
        return cls()

    @property
    def codes(self) -> List[str]:
        return self.code.split(", ") if self.code else []
