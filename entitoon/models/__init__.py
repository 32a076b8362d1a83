"""Models package for EntiToon."""
from .conversion import (
    ConversionStats,
    IssueCode,
    IssueSeverity,
    ValidationIssue,
    ValidationReport,
)
