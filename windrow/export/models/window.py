"""Export window data model."""

from pydantic import BaseModel, ConfigDict, Field


class ExportWindow(BaseModel):
    """Immutable windowing parameters for one export job.

    Attributes:
        offset: Records to skip before the export window starts
        take: Page size requested per physical fetch
        limit: Maximum records to process overall (0 = unlimited)
        records_per_segment: Maximum records per logical segment (0 = unlimited)
        total_records: Size of the full source set, as reported by the caller
    """

    offset: int = Field(..., ge=0)
    take: int = Field(..., gt=0)
    limit: int = Field(..., ge=0)
    records_per_segment: int = Field(..., ge=0)
    total_records: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True, strict=True)

    @property
    def record_total(self) -> int:
        """Number of records an export over this window will process."""
        total = max(self.total_records - self.offset, 0)
        if self.limit > 0 and self.limit < total:
            return self.limit
        return total

    @property
    def is_limited(self) -> bool:
        return self.limit > 0

    @property
    def is_segmented(self) -> bool:
        return self.records_per_segment > 0
