"""
fieldrules Message Placeholders
===============================

Fills rule-specific placeholders in failure messages once the host
validator has resolved `:attribute`.

    greater_than             :floor    -> parameters[0]
    less_than                :ceiling  -> parameters[0]
    min_if                   :floor    -> parameters[2]
    mutually_exclusive_with  :values   -> parameters joined with " or "
    unique_with              :fields   -> attribute + parameters[1:], comma joined
    array_not_before         :date     -> parameters[0]

Parameters are passed through the attribute label resolver first, so
field names read the same way `:attribute` does.
"""

from __future__ import annotations

from typing import Callable, Dict, List

Label = Callable[[str], str]
Replacer = Callable[[str, str, List[str], Label], str]


def _labels(parameters: List[str], label: Label) -> List[str]:
    return [label(parameter) for parameter in parameters]


def replace_mutually_exclusive_with(
    message: str, attribute: str, parameters: List[str], label: Label
) -> str:
    return message.replace(":values", " or ".join(_labels(parameters, label)))


def replace_greater_than(
    message: str, attribute: str, parameters: List[str], label: Label
) -> str:
    return message.replace(":floor", label(parameters[0]))


def replace_less_than(
    message: str, attribute: str, parameters: List[str], label: Label
) -> str:
    return message.replace(":ceiling", label(parameters[0]))


def replace_min_if(
    message: str, attribute: str, parameters: List[str], label: Label
) -> str:
    return message.replace(":floor", label(parameters[2]))


def replace_unique_with(
    message: str, attribute: str, parameters: List[str], label: Label
) -> str:
    # The attribute takes the table name's slot
    fields = [attribute] + list(parameters[1:])
    return message.replace(":fields", ", ".join(_labels(fields, label)))


def replace_array_not_before(
    message: str, attribute: str, parameters: List[str], label: Label
) -> str:
    return message.replace(":date", parameters[0])


REPLACERS: Dict[str, Replacer] = {
    "mutually_exclusive_with": replace_mutually_exclusive_with,
    "greater_than": replace_greater_than,
    "less_than": replace_less_than,
    "min_if": replace_min_if,
    "unique_with": replace_unique_with,
    "array_not_before": replace_array_not_before,
}


def default_label(name: str) -> str:
    """Human-readable field name: "first_name" -> "first name"."""
    return name.replace("_", " ")


def substitute(
    message: str,
    attribute: str,
    rule_name: str,
    parameters: List[str],
    label: Label = default_label,
) -> str:
    """
    Replace the placeholders owned by `rule_name`.

    Messages for rules without a replacer are returned unchanged.

    Example:
        >>> substitute("The price must be greater than :floor.", "price",
        ...            "greater_than", ["min_price"])
        'The price must be greater than min price.'
    """
    replacer = REPLACERS.get(rule_name)
    if replacer is None:
        return message
    return replacer(message, attribute, parameters, label)
