"""
fieldrules Rule Provider
========================

Startup wiring for the extension rules.

Call `boot()` once while the application starts and hand the returned
registry to every `Validator`:

    registry = boot(Config.from_env())
    validator = Validator({"ssn": "required|ssn"}, registry=registry)

or let `make_validator` do both.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from fieldrules.core.config import Config
from fieldrules.utils.logger import configure_logging, get_logger
from fieldrules.validation.rules import (
    ArrayDates,
    ArrayIntegers,
    ArrayIntegersOrEmpty,
    ArrayIntegersRecursive,
    ArrayNotBefore,
    ArrayNotEmpty,
    ArrayNumeric,
    Currency,
    Future,
    GreaterThan,
    IntegerIf,
    LessThan,
    MinIf,
    MutuallyExclusiveWith,
    Negative,
    Past,
    Phone,
    Positive,
    Rule,
    Ssn,
    TodayOrFuture,
    TodayOrPast,
)
from fieldrules.validation.unique import UniqueWith
from fieldrules.validation.validator import RuleRegistry, RuleSpec, Validator

logger = get_logger("fieldrules.provider")


EXTENSION_RULES: Dict[str, Type[Rule]] = {
    rule_cls.name: rule_cls
    for rule_cls in (
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
        GreaterThan,
        LessThan,
        MinIf,
        IntegerIf,
        Phone,
        Negative,
        Positive,
        Ssn,
        MutuallyExclusiveWith,
        UniqueWith,
    )
}

DEFAULT_MESSAGES: Dict[str, str] = {
    "array_dates": "The :attribute must only contain valid dates.",
    "array_integers": "The :attribute must only contain integers.",
    "array_integers_or_empty": "The :attribute must only contain integers or empty values.",
    "array_integers_recursive": "The :attribute must only contain integers.",
    "array_not_before": "The :attribute must not contain dates before :date.",
    "array_not_empty": "The :attribute must contain at least one value.",
    "array_numeric": "The :attribute must only contain numbers.",
    "future": "The :attribute must be a date in the future.",
    "past": "The :attribute must be a date in the past.",
    "today_or_future": "The :attribute must be today or a date in the future.",
    "today_or_past": "The :attribute must be today or a date in the past.",
    "currency": "The :attribute must be a valid currency amount.",
    "greater_than": "The :attribute must be greater than :floor.",
    "less_than": "The :attribute must be less than :ceiling.",
    "min_if": "The :attribute must be at least :floor.",
    "integer_if": "The :attribute must be an integer.",
    "phone": "The :attribute must be a valid phone number.",
    "negative": "The :attribute must be a negative number.",
    "positive": "The :attribute must be a positive number.",
    "ssn": "The :attribute must be a valid social security number.",
    "mutually_exclusive_with": "The :attribute cannot be used together with :values.",
    "unique_with": "This combination of :fields already exists.",
}


def register_rules(registry: RuleRegistry) -> RuleRegistry:
    """Register every extension rule and its default message."""
    for name, rule_cls in EXTENSION_RULES.items():
        registry.register(name, rule_cls, DEFAULT_MESSAGES.get(name))

    logger.info("Registered validation rules", count=len(EXTENSION_RULES))
    return registry


def boot(config: Optional[Config] = None) -> RuleRegistry:
    """
    Build a rule registry for the application.

    Configures logging from `logging.*`, registers the host and
    extension rules and applies `validation.messages` overrides.

    Args:
        config: Application configuration (defaults only when omitted)

    Returns:
        Registry ready to pass to Validator
    """
    config = config or Config()

    configure_logging(
        level=config.get("logging.level", "warning"),
        format=config.get("logging.format", "text"),
    )

    registry = register_rules(RuleRegistry())

    for name, message in config.get_dict("validation.messages").items():
        if registry.has(name):
            registry.set_message(name, message)

    return registry


def make_validator(
    rules: Dict[str, RuleSpec],
    config: Optional[Config] = None,
    verifier: Any = None,
    registry: Optional[RuleRegistry] = None,
    **kwargs: Any,
) -> Validator:
    """
    Create a Validator wired to the extension rules.

    Custom attribute labels come from `validation.attributes` unless
    passed explicitly; field-specific messages ("email.unique_with")
    from `validation.messages` are passed through as well.
    """
    config = config or Config()
    registry = registry or boot(config)

    kwargs.setdefault("attributes", config.get_dict("validation.attributes"))
    kwargs.setdefault("messages", config.get_dict("validation.messages"))

    validator = Validator(rules, registry=registry, **kwargs)
    if verifier is not None:
        validator.with_presence_verifier(verifier)
    return validator
