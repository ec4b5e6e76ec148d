"""Lab report models."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from sehat_sense.domain.conditions import Condition


class ReportData(BaseModel):
    """Lab values extracted from a report; any field may be missing."""

    model_config = ConfigDict(frozen=True)

    hba1c: float | None = None
    glucose: float | None = None
    ldl: float | None = None
    hdl: float | None = None
    total_cholesterol: float | None = None
    triglycerides: float | None = None
    vitamin_d: float | None = None
    vitamin_b12: float | None = None
    sgpt: float | None = None
    sgot: float | None = None

    def present(self) -> dict[str, float]:
        """Return only the values that were found."""
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class ReportAnalysis:
    """Parsed report values with the conditions they indicate."""

    report_data: ReportData
    conditions: "set[Condition]"
