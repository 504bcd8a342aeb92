"""
fieldrules Validation
=====================

Extension rules and the validator that hosts them.

Features:
- Array content rules (dates, integers, numbers, non-empty)
- Date rules relative to now
- Currency, phone and SSN formats
- Numeric bounds, including bounds taken from other fields
- Conditional rules (min_if, integer_if, mutually_exclusive_with)
- Multi-column uniqueness (unique_with)
- Message placeholder substitution
"""

from fieldrules.validation.validator import (
    Validator,
    RuleRegistry,
    ValidationError,
    ValidationResult,
    UnknownRuleError,
    CallableRule,
    validate,
    validate_or_fail,
)
from fieldrules.validation.rules import (
    Rule,
    Required,
    Nullable,
    ArrayDates,
    ArrayIntegers,
    ArrayIntegersOrEmpty,
    ArrayIntegersRecursive,
    ArrayNotBefore,
    ArrayNotEmpty,
    ArrayNumeric,
    Future,
    Past,
    TodayOrFuture,
    TodayOrPast,
    Currency,
    Phone,
    Ssn,
    GreaterThan,
    LessThan,
    Negative,
    Positive,
    MinIf,
    IntegerIf,
    MutuallyExclusiveWith,
)
from fieldrules.validation.unique import UniqueWith, UniqueWithDirective
from fieldrules.validation.messages import REPLACERS, substitute

__all__ = [
    # Core
    "Validator",
    "RuleRegistry",
    "ValidationError",
    "ValidationResult",
    "UnknownRuleError",
    "CallableRule",
    "validate",
    "validate_or_fail",
    # Rules
    "Rule",
    "Required",
    "Nullable",
    "ArrayDates",
    "ArrayIntegers",
    "ArrayIntegersOrEmpty",
    "ArrayIntegersRecursive",
    "ArrayNotBefore",
    "ArrayNotEmpty",
    "ArrayNumeric",
    "Future",
    "Past",
    "TodayOrFuture",
    "TodayOrPast",
    "Currency",
    "Phone",
    "Ssn",
    "GreaterThan",
    "LessThan",
    "Negative",
    "Positive",
    "MinIf",
    "IntegerIf",
    "MutuallyExclusiveWith",
    "UniqueWith",
    "UniqueWithDirective",
    # Messages
    "REPLACERS",
    "substitute",
]
