"""
Unit tests for the unique_with directive parser and rule.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from fieldrules.database.presence import CallablePresenceVerifier
from fieldrules.validation import unique
from fieldrules.validation.unique import UniqueWith, UniqueWithDirective


def lookup(data):
    return lambda name: data.get(name)


class TestUniqueWithDirective:

    @pytest.mark.unit
    def test_trailing_id_is_ignore_clause(self):
        directive = UniqueWithDirective.parse("email", ["users", "email", "5"], lookup({}))

        assert directive.table == "users"
        assert directive.primary_column == "email"
        assert directive.ignore_id == "5"
        assert directive.ignore_column is None
        assert directive.extra_columns == {}

    @pytest.mark.unit
    def test_aliases_and_ignore_column(self):
        data = {"email": "a@b.c", "status": "enabled"}
        directive = UniqueWithDirective.parse(
            "email",
            ["users", "email=mail_addr", "status=active", "3=id"],
            lookup(data),
        )

        assert directive.table == "users"
        assert directive.primary_column == "mail_addr"
        assert directive.extra_columns == {"active": "enabled"}
        assert directive.ignore_id == "3"
        assert directive.ignore_column == "id"

    @pytest.mark.unit
    def test_lone_id_keeps_attribute_as_column(self):
        directive = UniqueWithDirective.parse("email", ["users", "5"], lookup({}))

        assert directive.primary_column == "email"
        assert directive.ignore_id == "5"
        assert directive.extra_columns == {}

    @pytest.mark.unit
    def test_whitespace_is_trimmed(self):
        directive = UniqueWithDirective.parse(
            "email",
            [" users ", " email = mail ", " 7 = uid "],
            lookup({}),
        )

        assert directive.table == "users"
        assert directive.primary_column == "mail"
        assert directive.ignore_id == "7"
        assert directive.ignore_column == "uid"

    @pytest.mark.unit
    @pytest.mark.parametrize("last", ["0", "05", "-1", "id", "1a"])
    def test_last_parameter_without_positive_id_is_a_field(self, last):
        directive = UniqueWithDirective.parse("email", ["users", last], lookup({last: "x"}))

        assert directive.ignore_id is None
        assert directive.ignore_column is None
        assert directive.extra_columns == {last: "x"}

    @pytest.mark.unit
    def test_sibling_fields_become_constraints(self):
        data = {"first_name": "Ada", "last_name": "Lovelace", "account_id": 4}
        directive = UniqueWithDirective.parse(
            "first_name",
            ["people", "last_name", "account_id=account"],
            lookup(data),
        )

        assert directive.primary_column == "first_name"
        assert directive.extra_columns == {"last_name": "Lovelace", "account": 4}

    @pytest.mark.unit
    def test_table_only(self):
        directive = UniqueWithDirective.parse("email", ["users"], lookup({}))

        assert directive.table == "users"
        assert directive.primary_column == "email"
        assert directive.ignore_id is None


class TestUniqueWith:

    @pytest.mark.unit
    def test_passes_when_no_rows_match(self, verifier, count_func):
        rule = UniqueWith(parameters=["users", "account_id", "9"], verifier=verifier)
        data = {"email": "a@b.c", "account_id": 2}

        assert rule.validate("a@b.c", "email", data)
        count_func.assert_called_once_with(
            "users", "email", "a@b.c", "9", None, {"account_id": 2}
        )

    @pytest.mark.unit
    def test_fails_when_rows_match(self):
        verifier = CallablePresenceVerifier(Mock(return_value=1))
        rule = UniqueWith(parameters=["users"], verifier=verifier)

        assert not rule.validate("a@b.c", "email", {"email": "a@b.c"})

    @pytest.mark.unit
    def test_passes_without_verifier(self):
        assert UniqueWith(parameters=["users"]).validate("a@b.c", "email", {})

    @pytest.mark.unit
    def test_verifier_errors_propagate(self):
        verifier = CallablePresenceVerifier(Mock(side_effect=RuntimeError("db down")))
        rule = UniqueWith(parameters=["users"], verifier=verifier)

        with pytest.raises(RuntimeError, match="db down"):
            rule.validate("a@b.c", "email", {})

    @pytest.mark.unit
    def test_sync_check_defers_to_async_verifier(self, monkeypatch):
        log = Mock()
        monkeypatch.setattr(unique, "logger", log)
        verifier = Mock(is_async=True)
        verifier.get_count = AsyncMock(return_value=3)
        rule = UniqueWith(parameters=["users"], verifier=verifier)

        assert rule.validate("a@b.c", "email", {})
        verifier.get_count.assert_not_called()
        log.warning.assert_called_once()
        assert log.warning.call_args.kwargs == {"field": "email", "table": "users"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_async_check_awaits_verifier(self):
        verifier = Mock(is_async=True)
        verifier.get_count = AsyncMock(return_value=3)
        rule = UniqueWith(parameters=["users", "email=mail"], verifier=verifier)

        assert not await rule.validate_async("a@b.c", "email", {})
        verifier.get_count.assert_awaited_once_with("users", "mail", "a@b.c", None, None, {})

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_async_check_with_sync_verifier(self, verifier):
        rule = UniqueWith(parameters=["users"], verifier=verifier)
        assert await rule.validate_async("a@b.c", "email", {})
