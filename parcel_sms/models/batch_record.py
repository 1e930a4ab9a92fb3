from typing import Optional
from pydantic import BaseModel
from pydantic.config import ConfigDict


class BatchRecord(BaseModel):
    """One row of batch-driver output."""
    message: str
    address: str = ""
    code: str = ""
    success: bool = False
    address_evidence: Optional[str] = None
    code_evidence: Optional[str] = None

    model_config = ConfigDict(extra="allow")
