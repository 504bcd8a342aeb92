"""
fieldrules Validator
====================

Host validator for the rule set.

Resolves pipe-separated rule strings through a `RuleRegistry`, runs the
rules against a data bag and collects failure messages with their
placeholders filled in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type, Union

from fieldrules.utils.helpers import data_get, is_empty
from fieldrules.utils.logger import get_logger
from fieldrules.validation.messages import default_label, substitute
from fieldrules.validation.rules import Nullable, Required, Rule

logger = get_logger("fieldrules.validation")


class ValidationError(Exception):
    """
    Validation failed exception.

    Contains all validation errors.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}

    def __str__(self) -> str:
        if self.errors:
            lines = [
                f"  - {field_name}: {msg}"
                for field_name, messages in self.errors.items()
                for msg in messages
            ]
            return "Validation failed:\n" + "\n".join(lines)
        return "Validation failed"

    def first(self, field_name: Optional[str] = None) -> Optional[str]:
        """Get first error message."""
        return _first(self.errors, field_name)


class UnknownRuleError(ValueError):
    """Rule name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Validation rule '{name}' is not registered")
        self.name = name


@dataclass
class ValidationResult:
    """
    Result of validation.

    Contains validated data and any errors.
    """

    valid: bool
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    def failed(self) -> bool:
        """Check if validation failed."""
        return not self.valid

    def has_error(self, field_name: str) -> bool:
        """Check if field has error."""
        return field_name in self.errors

    def get_errors(self, field_name: str) -> List[str]:
        """Get errors for field."""
        return self.errors.get(field_name, [])

    def first_error(self, field_name: Optional[str] = None) -> Optional[str]:
        """Get first error message."""
        return _first(self.errors, field_name)

    def all_errors(self) -> List[str]:
        """Get all error messages as flat list."""
        return [msg for messages in self.errors.values() for msg in messages]

    def raise_if_invalid(self) -> None:
        """Raise ValidationError if invalid."""
        if not self.valid:
            raise ValidationError(errors=self.errors)


def _first(errors: Dict[str, List[str]], field_name: Optional[str]) -> Optional[str]:
    if field_name:
        messages = errors.get(field_name, [])
        return messages[0] if messages else None
    for messages in errors.values():
        if messages:
            return messages[0]
    return None


class RuleRegistry:
    """
    Name -> rule class table used to resolve rule strings.

    Example:
        registry = RuleRegistry()
        registry.register("phone", Phone, "The :attribute is not a phone number.")
        rule = registry.create("phone", [])
    """

    def __init__(self) -> None:
        self._rules: Dict[str, Type[Rule]] = {}
        self._messages: Dict[str, str] = {}

        self.register(Required.name, Required)
        self.register(Nullable.name, Nullable)

    def register(
        self,
        name: str,
        rule_cls: Type[Rule],
        message: Optional[str] = None,
    ) -> RuleRegistry:
        """Register a rule class under `name`, optionally with a message."""
        key = name.lower()
        self._rules[key] = rule_cls
        if message is not None:
            self._messages[key] = message
        return self

    def extend(self, rules: Dict[str, Type[Rule]]) -> RuleRegistry:
        """Register several rule classes at once."""
        for name, rule_cls in rules.items():
            self.register(name, rule_cls)
        return self

    def set_message(self, name: str, message: str) -> None:
        """Override the default message of a registered rule."""
        self._messages[name.lower()] = message

    def message_for(self, name: str) -> Optional[str]:
        return self._messages.get(name.lower())

    def has(self, name: str) -> bool:
        return name.lower() in self._rules

    def names(self) -> List[str]:
        return sorted(self._rules)

    def create(self, name: str, parameters: Optional[List[str]] = None) -> Rule:
        """
        Instantiate a registered rule.

        Raises:
            UnknownRuleError: If no rule is registered under `name`
        """
        rule_cls = self._rules.get(name.lower())
        if rule_cls is None:
            raise UnknownRuleError(name)
        return rule_cls(parameters=list(parameters or []))


class CallableRule(Rule):
    """Rule wrapper for callable validators."""

    name = "callable"
    message = "The :attribute is invalid."

    def __init__(self, func: Callable) -> None:
        self.func = func
        self.parameters = []

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        try:
            return bool(self.func(value, field, data))
        except Exception:
            return False


# Rule parsing types
RuleSpec = Union[str, Rule, List[Union[str, Rule]], Callable]


class Validator:
    """
    Main validation class.

    Example:
        registry = boot()
        validator = Validator({
            "email": "required|unique_with:users,email,account_id",
            "discount": "min_if:type,2,100",
            "phone": "phone|mutually_exclusive_with:fax",
        }, registry=registry)

        result = validator.with_presence_verifier(verifier).validate(data)
        if not result:
            print(result.errors)
    """

    def __init__(
        self,
        rules: Dict[str, RuleSpec],
        registry: Optional[RuleRegistry] = None,
        messages: Optional[Dict[str, str]] = None,
        attributes: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize validator.

        Args:
            rules: Validation rules per field
            registry: Rule table (host built-ins only when omitted)
            messages: Custom error messages ("rule" or "field.rule" keys)
            attributes: Custom field names for messages
        """
        self.registry = registry or RuleRegistry()
        self.messages = messages or {}
        self.attributes = attributes or {}
        self.verifier = None
        self.rules = {
            field_name: self._parse_rule_spec(spec)
            for field_name, spec in rules.items()
        }

    def _parse_rule_spec(self, spec: RuleSpec) -> List[Rule]:
        """Parse a single rule specification."""
        if isinstance(spec, Rule):
            return [spec]

        if isinstance(spec, list):
            rules = []
            for item in spec:
                rules.extend(self._parse_rule_spec(item))
            return rules

        if isinstance(spec, str):
            return self._parse_string_rules(spec)

        if callable(spec):
            return [CallableRule(spec)]

        raise TypeError(f"Unsupported rule specification: {spec!r}")

    def _parse_string_rules(self, rule_string: str) -> List[Rule]:
        """
        Parse pipe-separated rule string.

        Example: "required|greater_than:0|unique_with:users,email"
        """
        rules = []

        for part in rule_string.split("|"):
            part = part.strip()
            if not part:
                continue

            name, _, params_str = part.partition(":")
            params = params_str.split(",") if params_str else []
            rules.append(self.registry.create(name.strip(), params))

        return rules

    def with_presence_verifier(self, verifier: Any) -> Validator:
        """Set the row-count collaborator used by unique_with."""
        self.verifier = verifier
        return self

    def label(self, field_name: str) -> str:
        """Display name of a field for messages."""
        return self.attributes.get(field_name, default_label(field_name))

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate data synchronously.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with errors
        """
        errors: Dict[str, List[str]] = {}
        validated: Dict[str, Any] = {}

        for field_name, rules in self.rules.items():
            value = data_get(data, field_name)
            field_errors = [
                self._get_message(field_name, rule)
                for rule in self._applicable(value, rules)
                if not self._run(rule, value, field_name, data)
            ]

            if field_errors:
                errors[field_name] = field_errors
            else:
                validated[field_name] = value

        return ValidationResult(valid=not errors, data=validated, errors=errors)

    async def validate_async(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate data asynchronously.

        Rules exposing `validate_async` (unique_with) are awaited; the
        rest run synchronously.
        """
        errors: Dict[str, List[str]] = {}
        validated: Dict[str, Any] = {}

        for field_name, rules in self.rules.items():
            value = data_get(data, field_name)
            field_errors = []

            for rule in self._applicable(value, rules):
                self._inject(rule)
                if hasattr(rule, "validate_async"):
                    passed = await rule.validate_async(value, field_name, data)
                else:
                    passed = rule.validate(value, field_name, data)
                if not passed:
                    self._log_failure(field_name, rule)
                    field_errors.append(self._get_message(field_name, rule))

            if field_errors:
                errors[field_name] = field_errors
            else:
                validated[field_name] = value

        return ValidationResult(valid=not errors, data=validated, errors=errors)

    def _applicable(self, value: Any, rules: List[Rule]) -> List[Rule]:
        """
        Rules that apply to the value.

        Empty values only run implicit rules (required); everything else
        is skipped, so optional fields are not checked until filled in.
        """
        if is_empty(value):
            return [rule for rule in rules if rule.implicit]
        return [rule for rule in rules if not isinstance(rule, (Required, Nullable))]

    def _inject(self, rule: Rule) -> None:
        if self.verifier is not None and hasattr(rule, "verifier"):
            rule.verifier = self.verifier

    def _run(self, rule: Rule, value: Any, field_name: str, data: Dict[str, Any]) -> bool:
        self._inject(rule)
        passed = rule.validate(value, field_name, data)
        if not passed:
            self._log_failure(field_name, rule)
        return passed

    def _log_failure(self, field_name: str, rule: Rule) -> None:
        logger.debug("Rule failed", field=field_name, rule=rule.name)

    def _get_message(self, field_name: str, rule: Rule) -> str:
        """Get error message for rule with placeholders filled in."""
        template = (
            self.messages.get(f"{field_name}.{rule.name}")
            or self.messages.get(rule.name)
            or self.registry.message_for(rule.name)
            or rule.message
        )

        message = template.replace(":attribute", self.label(field_name))
        return substitute(message, field_name, rule.name, rule.parameters, self.label)


# Convenience functions

def validate(
    data: Dict[str, Any],
    rules: Dict[str, RuleSpec],
    registry: Optional[RuleRegistry] = None,
    messages: Optional[Dict[str, str]] = None,
) -> ValidationResult:
    """
    Validate data with rules.

    Example:
        result = validate(
            {"ssn": "123-45-6789"},
            {"ssn": "required|ssn"},
            registry=boot(),
        )
    """
    return Validator(rules, registry=registry, messages=messages).validate(data)


def validate_or_fail(
    data: Dict[str, Any],
    rules: Dict[str, RuleSpec],
    registry: Optional[RuleRegistry] = None,
    messages: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Validate data and raise on failure.

    Returns validated data if successful.

    Raises:
        ValidationError: If validation fails
    """
    result = validate(data, rules, registry=registry, messages=messages)
    result.raise_if_invalid()
    return result.data
