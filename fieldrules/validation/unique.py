"""
fieldrules Unique-With Rule
===========================

Uniqueness across a combination of columns.

Rule string:
    unique_with:table,field1[=column1],field2[=column2],...[,ignore_id[=ignore_column]]

Example:
    "email": "unique_with:users,email=mail_addr,status=active,3=id"

    counts rows of `users` where mail_addr = <email>, active = <status>
    and id <> 3; the rule passes when there are none.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple

from fieldrules.utils.helpers import data_get
from fieldrules.utils.logger import get_logger
from fieldrules.validation.rules import Rule

logger = get_logger("fieldrules.validation.unique")

_IGNORE_ID = re.compile(r"^[1-9][0-9]*$")


@dataclass
class UniqueWithDirective:
    """
    Parsed unique_with parameters.

    Attributes:
        table: Table to count rows in
        primary_column: Column compared against the validated value
        extra_columns: Column -> value constraints from sibling fields
        ignore_id: Row id excluded from the count
        ignore_column: Column holding `ignore_id` (verifier default when None)
    """

    table: str
    primary_column: str
    extra_columns: Dict[str, Any] = field(default_factory=dict)
    ignore_id: Optional[str] = None
    ignore_column: Optional[str] = None

    @classmethod
    def parse(
        cls,
        attribute: str,
        parameters: List[str],
        current_value_of: Callable[[str], Any],
    ) -> UniqueWithDirective:
        """
        Parse unique_with parameters for the field being validated.

        Args:
            attribute: Field under validation
            parameters: Rule parameters, table name first
            current_value_of: Lookup for sibling field values

        Returns:
            Parsed directive
        """
        remaining = [parameter.strip() for parameter in parameters]
        table = remaining.pop(0)

        ignore_id, ignore_column = _pop_ignore(remaining)

        primary_column = attribute
        extra_columns: Dict[str, Any] = {}

        for parameter in remaining:
            field_name, _, column = parameter.partition("=")
            field_name = field_name.strip()
            column = column.strip() or field_name

            if field_name == attribute:
                primary_column = column
            else:
                extra_columns[column] = current_value_of(field_name)

        return cls(
            table=table,
            primary_column=primary_column,
            extra_columns=extra_columns,
            ignore_id=ignore_id,
            ignore_column=ignore_column,
        )


def _pop_ignore(parameters: List[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Take the trailing ignore clause off the parameter list, if present.

    Only a positive id without leading zeros ("5", "12=user_id") counts,
    so a field or column name in last position is left alone.
    """
    if not parameters:
        return None, None

    parts = [part.strip() for part in parameters[-1].split("=")]
    if not _IGNORE_ID.match(parts[0]):
        return None, None

    parameters.pop()
    ignore_column = parts[-1] if len(parts) > 1 else None
    return parts[0], ignore_column


@dataclass
class UniqueWith(Rule):
    """
    Value must be unique in combination with other fields.

    The count query goes through the injected presence verifier. A
    synchronous verifier is queried from `validate`; an async one from
    `validate_async`, in which case the synchronous check passes and
    defers to the async validator. Without a verifier the rule passes.
    """

    name: ClassVar[str] = "unique_with"
    parameters: List[str] = field(default_factory=list)
    message: str = "This combination of :fields already exists."

    # Presence verifier will be injected by validator
    verifier: Any = field(default=None, repr=False, compare=False)

    def directive(self, field_name: str, data: Dict[str, Any]) -> UniqueWithDirective:
        """Parse parameters against the current data bag."""
        return UniqueWithDirective.parse(
            field_name,
            self.parameters,
            lambda name: data_get(data, name),
        )

    def _count(self, value: Any, directive: UniqueWithDirective) -> Any:
        logger.debug(
            "Counting rows",
            table=directive.table,
            column=directive.primary_column,
            extra=list(directive.extra_columns),
            ignore_id=directive.ignore_id,
        )
        return self.verifier.get_count(
            directive.table,
            directive.primary_column,
            value,
            directive.ignore_id,
            directive.ignore_column,
            directive.extra_columns,
        )

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        if self.verifier is None:
            return True
        if getattr(self.verifier, "is_async", False):
            logger.warning(
                "Async presence verifier skipped by synchronous validation; use validate_async",
                field=field,
                table=self.parameters[0] if self.parameters else None,
            )
            return True
        return self._count(value, self.directive(field, data)) == 0

    async def validate_async(
        self,
        value: Any,
        field: str,
        data: Dict[str, Any],
    ) -> bool:
        """Run the count query, awaiting async verifiers."""
        if self.verifier is None:
            return True

        count = self._count(value, self.directive(field, data))
        if inspect.isawaitable(count):
            count = await count
        return count == 0
