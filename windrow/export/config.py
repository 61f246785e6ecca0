"""Export job settings.

This module centralizes the defaults an export job falls back to when a
profile leaves page or segment sizes unset.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .models.window import ExportWindow

# Records requested from the store per physical fetch
DEFAULT_PAGE_SIZE = 100


class ExportProfile(BaseModel):
    """User-facing export settings.

    Attributes:
        offset: Records to skip before exporting
        limit: Maximum records to export (0 = all)
        batch_size: Records per output segment, e.g. per file (0 = single segment)
        page_size: Records fetched from the store per request
    """

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)
    batch_size: int = Field(default=0, ge=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    model_config = ConfigDict(frozen=True)

    def window(self, total_records: int) -> ExportWindow:
        """Build the export window for a source set of the given size.

        Args:
            total_records: Size of the full source set

        Returns:
            ExportWindow for this profile

        Examples:
            >>> ExportProfile(offset=5, limit=12).window(25).record_total
            12
        """
        return ExportWindow(
            offset=self.offset,
            take=self.page_size,
            limit=self.limit,
            records_per_segment=self.batch_size,
            total_records=total_records,
        )
