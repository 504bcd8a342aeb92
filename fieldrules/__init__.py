"""
fieldrules - Extra validation rules
===================================

Additional rule predicates for form validation: array contents, dates
relative to now, currency/phone/SSN formats, numeric bounds, conditional
rules and multi-column uniqueness, with message placeholder substitution.

Quick Start:
    from fieldrules import boot, Validator

    registry = boot()
    result = Validator(
        {"amount": "required|currency", "ssn": "ssn"},
        registry=registry,
    ).validate({"amount": "$1,200.00", "ssn": "123-45-6789"})
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from fieldrules.core.config import Config
from fieldrules.provider import boot, make_validator, register_rules
from fieldrules.validation import (
    Rule,
    RuleRegistry,
    ValidationError,
    ValidationResult,
    Validator,
    validate,
    validate_or_fail,
)


def __getattr__(name: str):
    """Lazy loading of the database layer (pulls in aiosqlite)."""
    _imports = {
        "PresenceVerifier": "fieldrules.database.presence",
        "CallablePresenceVerifier": "fieldrules.database.presence",
        "DatabasePresenceVerifier": "fieldrules.database.presence",
        "DatabaseConfig": "fieldrules.database.connection",
        "Logger": "fieldrules.utils.logger",
    }

    if name in _imports:
        import importlib
        module = importlib.import_module(_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'fieldrules' has no attribute '{name}'")


__all__ = [
    "__version__",
    "Config",
    "boot",
    "make_validator",
    "register_rules",
    "Rule",
    "RuleRegistry",
    "ValidationError",
    "ValidationResult",
    "Validator",
    "validate",
    "validate_or_fail",
    # Lazy
    "PresenceVerifier",
    "CallablePresenceVerifier",
    "DatabasePresenceVerifier",
    "DatabaseConfig",
    "Logger",
]
