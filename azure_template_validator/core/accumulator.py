"""
Failure records and the per-call condition accumulator.

Every field check reports problems by appending a FailureRecord to the
ConditionAccumulator it was handed. The accumulator is owned by a single
validate() call: it is append-only, never reset mid-validation and never
shared between concurrent validations.

A record's key is the localized config key of the field that caused it, or
None for an unscoped (generic) failure.
"""

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from azure_template_validator.constants import InstanceTemplateProperty
from .context import LocalizationContext
from .exceptions import InstanceTemplateValidationError


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class FailureRecord:
    """
    One reported problem.

    Attributes:
        key: Localized config key of the offending field, None if unscoped
        token: Property the record is scoped to, None if unscoped
        message: Formatted, human-readable message
        template: Message template before formatting
        args: Positional format arguments applied to the template
        severity: ERROR or WARNING
        exception: Underlying exception for generic failures
    """
    key: Optional[str]
    token: Optional[InstanceTemplateProperty]
    message: str
    template: str
    args: Tuple[Any, ...] = ()
    severity: Severity = Severity.ERROR
    exception: Optional[BaseException] = None

    @property
    def is_generic(self) -> bool:
        return self.token is None


def format_message(template: str, *args: Any) -> str:
    """Apply printf-style args; templates without placeholders are returned as-is."""
    if not args:
        return template
    return template % args


class ConditionAccumulator:
    """
    Ordered, append-only collection of FailureRecords for one validation pass.

    Example:
        accumulator = ConditionAccumulator()
        validator.validate("template", config, accumulator, LocalizationContext())
        if accumulator.has_error():
            for key, records in accumulator.conditions_by_key().items():
                ...
    """

    def __init__(self):
        self._records: List[FailureRecord] = []

    def _add(
        self,
        severity: Severity,
        token: Optional[InstanceTemplateProperty],
        localization_context: Optional[LocalizationContext],
        template: str,
        args: Tuple[Any, ...],
        exception: Optional[BaseException]
    ) -> FailureRecord:
        key = None
        if token is not None:
            context = localization_context or LocalizationContext()
            key = context.localize_key(token.config_key)

        record = FailureRecord(
            key=key,
            token=token,
            message=format_message(template, *args),
            template=template,
            args=args,
            severity=severity,
            exception=exception,
        )
        self._records.append(record)
        return record

    def add_error(
        self,
        token: Optional[InstanceTemplateProperty],
        localization_context: Optional[LocalizationContext],
        template: str,
        *args: Any,
        exception: Optional[BaseException] = None
    ) -> FailureRecord:
        """Record an error. Pass token=None for an unscoped failure."""
        return self._add(Severity.ERROR, token, localization_context, template, args, exception)

    def add_warning(
        self,
        token: Optional[InstanceTemplateProperty],
        localization_context: Optional[LocalizationContext],
        template: str,
        *args: Any,
        exception: Optional[BaseException] = None
    ) -> FailureRecord:
        """Record a warning. Warnings do not make has_error() true."""
        return self._add(Severity.WARNING, token, localization_context, template, args, exception)

    @property
    def records(self) -> List[FailureRecord]:
        return list(self._records)

    def errors(self) -> List[FailureRecord]:
        return [r for r in self._records if r.severity is Severity.ERROR]

    def warnings(self) -> List[FailureRecord]:
        return [r for r in self._records if r.severity is Severity.WARNING]

    def has_error(self) -> bool:
        return any(r.severity is Severity.ERROR for r in self._records)

    def has_warning(self) -> bool:
        return any(r.severity is Severity.WARNING for r in self._records)

    def conditions_by_key(self) -> Dict[Optional[str], List[FailureRecord]]:
        """Group records by key, keeping first-seen key order. Generic records sit under None."""
        grouped: Dict[Optional[str], List[FailureRecord]] = OrderedDict()
        for record in self._records:
            grouped.setdefault(record.key, []).append(record)
        return grouped

    def raise_if_errors(self) -> None:
        """
        Raise InstanceTemplateValidationError if any error was recorded.

        Caller-side convenience for hosts that prefer exceptions; validate()
        itself never raises for recorded failures.
        """
        errors = self.errors()
        if errors:
            raise InstanceTemplateValidationError(errors)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FailureRecord]:
        return iter(list(self._records))

    def __repr__(self) -> str:
        return f"ConditionAccumulator(errors={len(self.errors())}, warnings={len(self.warnings())})"
