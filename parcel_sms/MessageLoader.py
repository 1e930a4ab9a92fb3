import logging
import pandas as pd
from typing import List, Optional
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".txt", ".csv", ".xlsx", ".xls")


class MessageLoader:
    """
    Reads raw SMS texts for the batch driver.
      .txt          one message per line
      .csv          the `column` column (default "message")
      .xlsx / .xls  same, first sheet
    """

    def __init__(self, path: str, column: str = "message"):
        self.path = Path(path)
        self.column = column
        self.file_extension = self.path.suffix.lower()
        if not self.path.exists():
            raise ValueError(f"Input file not found: {self.path}")
        if self.file_extension not in SUPPORTED_SUFFIXES:
            raise ValueError(
                f"Unsupported input type {self.file_extension!r}; expected one of {', '.join(SUPPORTED_SUFFIXES)}"
            )

    def _load_frame(self) -> pd.DataFrame:
        if self.file_extension == ".csv":
            return pd.read_csv(self.path, dtype=str, keep_default_na=False)
        engine = "xlrd" if self.file_extension == ".xls" else "openpyxl"
        logger.info("Loading %s with %s engine", self.path.name, engine)
        return pd.read_excel(self.path, sheet_name=0, dtype=str, engine=engine)

    def _column_values(self, df: pd.DataFrame) -> List[str]:
        if self.column not in df.columns:
            raise ValueError(f"Column {self.column!r} not in {list(df.columns)}")
        out: List[str] = []
        for value in df[self.column]:
            if pd.notna(value) and str(value).strip():
                out.append(str(value).strip())
        return out

    def load(self, limit: Optional[int] = None) -> List[str]:
        if self.file_extension == ".txt":
            with self.path.open(encoding="utf-8") as f:
                messages = [ln.strip() for ln in f if ln.strip()]
        else:
            messages = self._column_values(self._load_frame())

        if limit is not None:
            messages = messages[:limit]
        logger.info("Loaded %d message(s) from %s", len(messages), self.path.name)
        return messages
