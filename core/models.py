"""Core data models for tabular ingestion"""

from typing import Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

from config import settings


class ParsedTable(BaseModel):
    """Schema plus bounded preview of one ingested file.

    ``row_count`` is the number of data rows in the source, independent of how
    many of them were kept in ``preview_rows``.
    """
    model_config = ConfigDict(frozen=True)

    columns: list[str] = []
    row_count: int = Field(default=0, ge=0)
    preview_rows: list[list[str]] = []
    source_name: str

    @model_validator(mode="after")
    def _check_shape(self) -> "ParsedTable":
        if len(self.preview_rows) > self.row_count:
            raise ValueError(
                f"preview has {len(self.preview_rows)} rows but row_count is {self.row_count}"
            )
        if len(self.preview_rows) > settings.PREVIEW_LIMIT:
            raise ValueError(
                f"preview has {len(self.preview_rows)} rows, limit is {settings.PREVIEW_LIMIT}"
            )
        width = len(self.columns)
        for i, row in enumerate(self.preview_rows):
            if len(row) != width:
                raise ValueError(f"preview row {i} has {len(row)} cells, expected {width}")
        return self

    @property
    def col_count(self) -> int:
        return len(self.columns)

    def to_dataframe(self, prefix: Optional[str] = None) -> pd.DataFrame:
        """
        Build a DataFrame from the preview rows

        Args:
            prefix: When given, columns are renamed with generate_unique_column_names

        Returns:
            DataFrame with one string column per table column
        """
        # Import here to avoid circular dependency (utils imports core)
        from utils.naming import generate_unique_column_names

        columns = list(self.columns)
        if prefix is not None:
            columns = generate_unique_column_names(columns, prefix)
        return pd.DataFrame(self.preview_rows, columns=columns, dtype=str)
