"""
TOON Converter

Turns one record or a list of records into a TOON stream, one line per
record:

    #Entity[P-101]|Name:John Doe|VisitDate:2025-02-15|Medications:[Metformin,Aspirin]

Each record goes through identity resolution, flattening and line encoding.
``convert`` is best-effort and does not raise for any well-formed value tree;
``validate_records`` is the opt-in check for inputs that would render
ambiguously.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional

from entitoon.models.conversion import (
    ConversionStats,
    IssueCode,
    IssueSeverity,
    ValidationIssue,
    ValidationReport,
)

from .encoder import (
    DEFAULT_DELIMITER,
    DEFAULT_HEADER_PREFIX,
    KEY_VALUE_SEPARATOR,
    encode_line,
    entity_tag,
    render_scalar,
)
from .flattener import flatten
from .identity import IdentityResolver, TokenFactory, is_truthy
from .keys import to_camel_case
from .values import is_native_sequence

logger = logging.getLogger(__name__)

DEFAULT_KEY_FIELD = "id"


@dataclass(frozen=True)
class ToonFormat:
    """Fixed TOON syntax settings."""

    delimiter: str = DEFAULT_DELIMITER
    header_prefix: str = DEFAULT_HEADER_PREFIX


def normalize_records(data: Any) -> List[Any]:
    """Return ``data`` as a list of records."""
    if is_native_sequence(data):
        return list(data)
    return [data]


class ToonConverter:
    """Converts structured records into TOON lines."""

    def __init__(self, token_factory: Optional[TokenFactory] = None):
        self._format = ToonFormat()
        self._resolver = IdentityResolver(token_factory)

    @property
    def delimiter(self) -> str:
        return self._format.delimiter

    @property
    def header_prefix(self) -> str:
        return self._format.header_prefix

    def convert_record(self, record: Any, primary_key_field: str = DEFAULT_KEY_FIELD) -> str:
        identifier = self._resolver.resolve(record, primary_key_field)
        tag = entity_tag(identifier, self.header_prefix)
        return encode_line(tag, flatten(record), primary_key_field, self.delimiter)

    def convert_records(self, data: Any, primary_key_field: str = DEFAULT_KEY_FIELD) -> List[str]:
        """Convert ``data`` and return the encoded lines without joining them."""
        records = normalize_records(data)
        lines = [self.convert_record(record, primary_key_field) for record in records]
        logger.debug(f"Converted {len(lines)} records keyed by '{primary_key_field}'")
        return lines

    def convert(self, data: Any, primary_key_field: str = DEFAULT_KEY_FIELD) -> str:
        """Convert a record or list of records to a newline-joined TOON stream.

        Args:
            data: A mapping or a list of mappings (nested structures allowed).
            primary_key_field: Field holding the entity id, e.g. ``patient_id``.

        Returns:
            One line per record, joined by ``\\n``; empty string for no records.
        """
        return "\n".join(self.convert_records(data, primary_key_field))

    def validate_records(
        self, data: Any, primary_key_field: str = DEFAULT_KEY_FIELD
    ) -> ValidationReport:
        """Report inputs that ``convert`` accepts but renders lossily.

        Validation never changes what ``convert`` produces.
        """
        records = normalize_records(data)
        report = ValidationReport(record_count=len(records))

        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                report.issues.append(
                    ValidationIssue(
                        code=IssueCode.NON_MAPPING_RECORD,
                        severity=IssueSeverity.ERROR,
                        record_index=index,
                        message=f"Record is {type(record).__name__}, not an object",
                    )
                )
                continue

            if not is_truthy(record.get(primary_key_field)):
                report.issues.append(
                    ValidationIssue(
                        code=IssueCode.MISSING_KEY_FIELD,
                        severity=IssueSeverity.WARNING,
                        record_index=index,
                        key=primary_key_field,
                        message=f"No value for '{primary_key_field}', a random id will be generated",
                    )
                )
            elif self._breaks_tag(self._resolver.resolve(record, primary_key_field)):
                report.issues.append(
                    ValidationIssue(
                        code=IssueCode.AMBIGUOUS_VALUE,
                        severity=IssueSeverity.ERROR,
                        record_index=index,
                        key=primary_key_field,
                        message="Entity id contains ']' or the delimiter",
                    )
                )

            for key, value in flatten(record).items():
                if key == primary_key_field:
                    continue
                self._check_attribute(report, index, key, render_scalar(value))

        if report.issues:
            logger.info(
                f"Validation found {len(report.issues)} issues in {len(records)} records"
            )
        return report

    def _breaks_tag(self, identifier: str) -> bool:
        return "]" in identifier or self.delimiter in identifier

    def _check_attribute(
        self, report: ValidationReport, index: int, key: str, rendered: str
    ) -> None:
        camel_key = to_camel_case(key)
        if self.delimiter in camel_key or KEY_VALUE_SEPARATOR in camel_key:
            report.issues.append(
                ValidationIssue(
                    code=IssueCode.AMBIGUOUS_KEY,
                    severity=IssueSeverity.ERROR,
                    record_index=index,
                    key=key,
                    message=f"Key '{camel_key}' contains the delimiter or ':'",
                )
            )

        if self.delimiter in rendered:
            report.issues.append(
                ValidationIssue(
                    code=IssueCode.AMBIGUOUS_VALUE,
                    severity=IssueSeverity.ERROR,
                    record_index=index,
                    key=key,
                    message=f"Value of '{camel_key}' contains the delimiter '{self.delimiter}'",
                )
            )
        elif KEY_VALUE_SEPARATOR in rendered or self.header_prefix in rendered:
            report.issues.append(
                ValidationIssue(
                    code=IssueCode.AMBIGUOUS_VALUE,
                    severity=IssueSeverity.WARNING,
                    record_index=index,
                    key=key,
                    message=f"Value of '{camel_key}' contains ':' or '{self.header_prefix}'",
                )
            )

    def estimate_savings(
        self,
        data: Any,
        toon_text: Optional[str] = None,
        primary_key_field: str = DEFAULT_KEY_FIELD,
    ) -> ConversionStats:
        """Compare the compact JSON size of ``data`` with its TOON size."""
        records = normalize_records(data)
        if toon_text is None:
            toon_text = self.convert(records, primary_key_field)
        json_text = json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)
        return ConversionStats(
            record_count=len(records),
            line_count=len(toon_text.split("\n")) if toon_text else 0,
            json_chars=len(json_text),
            toon_chars=len(toon_text),
        )


_default_converter = ToonConverter()


def get_default_converter() -> ToonConverter:
    """Get the shared converter instance."""
    return _default_converter


def convert_to_toon(data: Any, primary_key_field: str = DEFAULT_KEY_FIELD) -> str:
    """Convert data to TOON with the shared converter."""
    return _default_converter.convert(data, primary_key_field)


def validate_records(data: Any, primary_key_field: str = DEFAULT_KEY_FIELD) -> ValidationReport:
    return _default_converter.validate_records(data, primary_key_field)


def estimate_savings(
    data: Any, toon_text: Optional[str] = None, primary_key_field: str = DEFAULT_KEY_FIELD
) -> ConversionStats:
    return _default_converter.estimate_savings(data, toon_text, primary_key_field)
