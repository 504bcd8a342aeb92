"""
fieldrules Validation Rules
===========================

Rule predicates for array contents, dates, money/phone/SSN formats,
numeric bounds and conditional requirements.

Every rule is built from the parameter list of a rule string
("min_if:type,2,100" -> parameters ["type", "2", "100"]) and answers
`validate(value, field, data)` with a plain bool. Rules never raise for
bad input values. Missing parameters are a caller error and surface as
the natural IndexError.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, ClassVar, Dict, List, Optional, Pattern

from fieldrules.utils.helpers import (
    data_get,
    flatten,
    has_key,
    is_digits,
    is_empty,
    is_falsy,
    is_numeric,
    loosely_equal,
    matches_date_format,
    parse_timestamp,
    to_number,
)


class Rule(ABC):
    """
    Abstract validation rule.

    Subclasses are dataclasses carrying the rule-string parameters.

    Example:
        @dataclass
        class Even(Rule):
            name: ClassVar[str] = "even"
            message: str = "The :attribute must be even."

            def validate(self, value, field, data):
                return is_digits(value) and int(value) % 2 == 0
    """

    name: ClassVar[str] = "rule"
    message: str = "The :attribute is invalid."
    parameters: List[str]

    # Implicit rules run even when the value is empty
    implicit: ClassVar[bool] = False

    @abstractmethod
    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        """
        Validate the value.

        Args:
            value: Value to validate
            field: Field name
            data: Full data being validated

        Returns:
            True if valid, False otherwise
        """
        ...

    def __call__(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        """Allow rule to be called directly."""
        return self.validate(value, field, data)


def _sequence(value: Any) -> Optional[List[Any]]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


@dataclass
class Required(Rule):
    """Require field to be present and not empty."""

    name: ClassVar[str] = "required"
    implicit: ClassVar[bool] = True
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute field is required."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        return not is_empty(value)


@dataclass
class Nullable(Rule):
    """Allow field to be null (stops validation if null)."""

    name: ClassVar[str] = "nullable"
    parameters: List[str] = field(default_factory=list)
    message: str = ""

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        return True


# =============================================================================
# Array Rules
# =============================================================================

@dataclass
class ArrayDates(Rule):
    """Every element parses against the date format in parameters[0]."""

    name: ClassVar[str] = "array_dates"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must only contain valid dates."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        items = _sequence(value)
        if items is None:
            return False
        fmt = self.parameters[0]
        return all(matches_date_format(item, fmt) for item in items)


@dataclass
class ArrayIntegers(Rule):
    """Every element of a flat array consists only of digits."""

    name: ClassVar[str] = "array_integers"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must only contain integers."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        items = _sequence(value)
        if items is None:
            return False
        return all(is_digits(item) for item in items)


@dataclass
class ArrayIntegersOrEmpty(Rule):
    """Every non-empty element consists only of digits."""

    name: ClassVar[str] = "array_integers_or_empty"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must only contain integers or empty values."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        items = _sequence(value)
        if items is None:
            return False
        return all(is_digits(item) for item in items if not is_empty(item))


@dataclass
class ArrayIntegersRecursive(Rule):
    """Every leaf of a nested array consists only of digits."""

    name: ClassVar[str] = "array_integers_recursive"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must only contain integers."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        items = _sequence(value)
        if items is None:
            return False
        return all(is_digits(item) for item in flatten(items))


@dataclass
class ArrayNotBefore(Rule):
    """No element is a date before the reference date in parameters[0]."""

    name: ClassVar[str] = "array_not_before"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must not contain dates before :date."
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        items = _sequence(value)
        if items is None:
            return False

        start = parse_timestamp(self.parameters[0], self.clock)
        if start is None:
            return False

        for item in items:
            desired = parse_timestamp(item, self.clock)
            if desired is None or desired < start:
                return False

        return True


@dataclass
class ArrayNotEmpty(Rule):
    """At least one element is non-empty."""

    name: ClassVar[str] = "array_not_empty"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must contain at least one value."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        items = _sequence(value)
        if items is None:
            return False
        return any(not is_empty(item) for item in items)


@dataclass
class ArrayNumeric(Rule):
    """Every element is numeric."""

    name: ClassVar[str] = "array_numeric"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must only contain numbers."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        items = _sequence(value)
        if items is None:
            return False
        return all(is_numeric(item) for item in items)


# =============================================================================
# Date Rules
# =============================================================================

@dataclass
class Future(Rule):
    """Date is strictly after now."""

    name: ClassVar[str] = "future"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be a date in the future."
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        timestamp = parse_timestamp(value, self.clock)
        return timestamp is not None and timestamp > self.clock().timestamp()


@dataclass
class Past(Future):
    """
    Anything that is not a future date.

    Defined as the negation of `future`, so "now" itself and unparsable
    strings both pass.
    """

    name: ClassVar[str] = "past"
    message: str = "The :attribute must be a date in the past."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        return not super().validate(value, field, data)


@dataclass
class TodayOrFuture(Rule):
    """Date is now or later."""

    name: ClassVar[str] = "today_or_future"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be today or a date in the future."
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        timestamp = parse_timestamp(value, self.clock)
        return timestamp is not None and timestamp >= self.clock().timestamp()


@dataclass
class TodayOrPast(Rule):
    """Date is now or earlier."""

    name: ClassVar[str] = "today_or_past"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be today or a date in the past."
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        timestamp = parse_timestamp(value, self.clock)
        return timestamp is not None and timestamp <= self.clock().timestamp()


# =============================================================================
# Format Rules
# =============================================================================

# Unsigned amount: grouped thousands, plain digits, leading zero or bare cents
_AMOUNT = (
    r"(?:[1-9]\d{0,2}(?:,\d{3})*(?:\.\d{0,2})?"
    r"|[1-9]\d*(?:\.\d{0,2})?"
    r"|0(?:\.\d{0,2})?"
    r"|\.\d{1,2})"
)


@dataclass
class Currency(Rule):
    """
    US currency amount.

    Accepts "$1,234.56", "-$5", "$-5", "($12.00)", ".99" and "0";
    rejects leading zeros ("01"), broken grouping ("1,23") and more than
    two decimal places. Numbers are checked in their string form.
    """

    name: ClassVar[str] = "currency"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be a valid currency amount."

    _pattern: ClassVar[Pattern] = re.compile(
        rf"\$?-?{_AMOUNT}|-?\$?{_AMOUNT}|\(\$?{_AMOUNT}\)",
        re.ASCII,
    )

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return False
        return self._pattern.fullmatch(str(value)) is not None


@dataclass
class Phone(Rule):
    """
    Loose US phone number.

    Optional leading country digit, optional brackets/spaces/dashes
    around the area code, then 3 + 4 digits.
    """

    name: ClassVar[str] = "phone"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be a valid phone number."

    _pattern: ClassVar[Pattern] = re.compile(
        r"^(\d[\s-]?)?[\(\[\s-]{0,2}?\d{3}[\)\]\s-]{0,2}?\d{3}[\s-]?\d{4}$",
        re.IGNORECASE | re.ASCII,
    )

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return False
        return self._pattern.match(str(value)) is not None


@dataclass
class Ssn(Rule):
    """Exactly nine digits once every other character is stripped."""

    name: ClassVar[str] = "ssn"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be a valid social security number."

    _non_digits: ClassVar[Pattern] = re.compile(r"[^0-9]")

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return False
        return len(self._non_digits.sub("", str(value))) == 9


# =============================================================================
# Numeric Rules
# =============================================================================

def _resolve_bound(parameter: str, data: Dict[str, Any]) -> Optional[float]:
    """Numeric parameter, or the value of the field it names."""
    if not is_numeric(parameter) and has_key(data, parameter):
        return to_number(data_get(data, parameter))
    return to_number(parameter)


@dataclass
class GreaterThan(Rule):
    """Value is greater than a number or another field's value."""

    name: ClassVar[str] = "greater_than"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be greater than :floor."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        bound = _resolve_bound(self.parameters[0], data)
        number = to_number(value)
        if bound is None or number is None:
            return False
        return number > bound


@dataclass
class LessThan(Rule):
    """Value is less than a number or another field's value."""

    name: ClassVar[str] = "less_than"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be less than :ceiling."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        bound = _resolve_bound(self.parameters[0], data)
        number = to_number(value)
        if bound is None or number is None:
            return False
        return number < bound


@dataclass
class Negative(Rule):
    """Numeric and strictly below zero."""

    name: ClassVar[str] = "negative"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be a negative number."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        return is_numeric(value) and float(value) < 0


@dataclass
class Positive(Rule):
    """Numeric and not below zero (zero counts as positive)."""

    name: ClassVar[str] = "positive"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be a positive number."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        return is_numeric(value) and float(value) >= 0


# =============================================================================
# Conditional Rules
# =============================================================================

@dataclass
class MinIf(Rule):
    """
    Minimum value while another field holds a given value.

    Parameters: [condition_field, condition_value, min_value]
    """

    name: ClassVar[str] = "min_if"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be at least :floor."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        column = self.parameters[0]
        column_value = self.parameters[1]
        min_value = self.parameters[2]

        if not loosely_equal(data_get(data, column), column_value):
            return True

        number = to_number(value)
        floor = to_number(min_value)
        if number is None or floor is None:
            return False
        return number >= floor


@dataclass
class IntegerIf(Rule):
    """
    Digits-only value while another field holds a given value.

    Parameters: [condition_field, condition_value]
    """

    name: ClassVar[str] = "integer_if"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute must be an integer."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        column = self.parameters[0]
        column_value = self.parameters[1]

        if loosely_equal(data_get(data, column), column_value):
            return is_digits(value)

        return True


@dataclass
class MutuallyExclusiveWith(Rule):
    """
    None of the named fields may be filled in alongside this one.

    A field holding 0 or "0" counts as not filled in.
    """

    name: ClassVar[str] = "mutually_exclusive_with"
    parameters: List[str] = field(default_factory=list)
    message: str = "The :attribute cannot be used together with :values."

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        return all(is_falsy(data_get(data, key)) for key in self.parameters)
