"""
Conversion models for TOON input validation reports and size statistics.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class IssueSeverity(str, Enum):
    """Severity of an input validation issue."""

    WARNING = "warning"
    ERROR = "error"


class IssueCode(str, Enum):
    """Kinds of input that convert accepts but renders lossily."""

    NON_MAPPING_RECORD = "non_mapping_record"
    MISSING_KEY_FIELD = "missing_key_field"
    AMBIGUOUS_VALUE = "ambiguous_value"
    AMBIGUOUS_KEY = "ambiguous_key"


class ValidationIssue(BaseModel):
    code: IssueCode = Field(..., description="Issue type")
    severity: IssueSeverity = Field(..., description="Issue severity")
    record_index: int = Field(..., ge=0, description="Position of the record in the input")
    key: Optional[str] = Field(None, description="Flattened attribute key, if any")
    message: str = Field(..., description="Human-readable description")


class ValidationReport(BaseModel):
    """Result of validating records before conversion."""

    record_count: int = Field(0, ge=0)
    issues: List[ValidationIssue] = Field(default_factory=list)
    checked_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == IssueSeverity.ERROR for issue in self.issues)

    @property
    def is_clean(self) -> bool:
        return not self.issues

    def issues_for(self, record_index: int) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.record_index == record_index]

    def to_summary(self) -> Dict[str, Any]:
        return {
            "record_count": self.record_count,
            "issue_count": len(self.issues),
            "errors": sum(1 for i in self.issues if i.severity == IssueSeverity.ERROR),
            "warnings": sum(1 for i in self.issues if i.severity == IssueSeverity.WARNING),
        }


class ConversionStats(BaseModel):
    """Size comparison between compact JSON input and its TOON rendering."""

    record_count: int = Field(..., ge=0)
    line_count: int = Field(..., ge=0)
    json_chars: int = Field(..., ge=0, description="Characters of compact JSON input")
    toon_chars: int = Field(..., ge=0, description="Characters of TOON output")

    @property
    def saved_chars(self) -> int:
        return self.json_chars - self.toon_chars

    @property
    def savings_ratio(self) -> float:
        if self.json_chars == 0:
            return 0.0
        return round(1.0 - (self.toon_chars / self.json_chars), 4)
