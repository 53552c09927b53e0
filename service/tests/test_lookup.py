"""
Tests for the batch INN lookup engine and result formatting.

Run with: pytest service/tests/test_lookup.py -v
"""

import pytest
from innbot.services.lookup import (
    Found,
    Invalid,
    InvalidInput,
    LookupEngine,
    NotFound,
    QueryError,
    Valid,
    format_outcomes,
    validate_identifier,
)
from innbot.services.registry import (
    CompanyInfo,
    RegistryNetworkError,
    RegistryStatusError,
)


class TestValidateIdentifier:
    """Tests for validate_identifier function."""

    def test_digits_are_valid(self):
        assert validate_identifier("7707083893") == Valid("7707083893")

    def test_surrounding_whitespace_is_trimmed(self):
        assert validate_identifier(" 123 ") == Valid("123")

    def test_letters_are_invalid(self):
        assert validate_identifier("abc") == Invalid("abc")

    def test_mixed_is_invalid(self):
        assert validate_identifier("77070a3893") == Invalid("77070a3893")

    def test_empty_is_invalid(self):
        assert validate_identifier("") == Invalid("")

    def test_blank_is_invalid(self):
        assert validate_identifier("   ") == Invalid("   ")

    def test_sign_is_invalid(self):
        assert validate_identifier("-123") == Invalid("-123")

    def test_non_ascii_digits_are_invalid(self):
        """Arabic-Indic digits are not INN digits."""
        assert validate_identifier("١٢٣") == Invalid("١٢٣")


class TestResolve:
    """Tests for LookupEngine.resolve."""

    @pytest.mark.asyncio
    async def test_empty_batch(self, engine, registry):
        assert await engine.resolve([]) == []
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_invalid_makes_no_request(self, engine, registry):
        outcomes = await engine.resolve(["abc"])

        assert outcomes == [InvalidInput("abc")]
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_one_valid_one_invalid(self, engine, registry):
        outcomes = await engine.resolve(["1" * 10, "bad"])

        assert len(outcomes) == 2
        assert sum(isinstance(o, InvalidInput) for o in outcomes) == 1
        assert registry.calls == ["1" * 10]

    @pytest.mark.asyncio
    async def test_found(self, engine):
        outcomes = await engine.resolve(["7707083893"])
        assert outcomes == [Found("7707083893", 'JSC "Alpha"', "Moscow, Tverskaya 1")]

    @pytest.mark.asyncio
    async def test_not_found(self, engine):
        assert await engine.resolve(["1234567890"]) == [NotFound("1234567890")]

    @pytest.mark.asyncio
    async def test_identifier_is_trimmed_before_query(self, engine, registry):
        await engine.resolve([" 7707083893 "])
        assert registry.calls == ["7707083893"]

    @pytest.mark.asyncio
    async def test_missing_name_and_address_fall_back(self, make_registry):
        registry = make_registry({"500": CompanyInfo(name=None, address=None)})
        engine = LookupEngine(registry)

        outcomes = await engine.resolve(["500"])

        assert outcomes == [Found("500", "no name (500)", "address not found")]

    @pytest.mark.asyncio
    async def test_empty_address_is_kept(self, make_registry):
        registry = make_registry({"500": CompanyInfo(name="Solo", address="")})
        engine = LookupEngine(registry)

        assert await engine.resolve(["500"]) == [Found("500", "Solo", "")]

    @pytest.mark.asyncio
    async def test_failure_does_not_abort_batch(self, make_registry, alpha):
        registry = make_registry({
            "7707083893": alpha,
            "666": RegistryStatusError("Registry responded with status 500", status_code=500),
        })
        engine = LookupEngine(registry)

        outcomes = await engine.resolve(["666", "7707083893"])

        assert outcomes[0] == QueryError("666", "Registry responded with status 500")
        assert isinstance(outcomes[1], Found)

    @pytest.mark.asyncio
    async def test_every_identifier_gets_a_call_despite_failures(self, make_registry):
        registry = make_registry({
            "1": RegistryNetworkError("connection refused"),
            "2": RegistryNetworkError("connection refused"),
        })
        engine = LookupEngine(registry, max_concurrency=1)

        outcomes = await engine.resolve(["1", "2", "3"])

        assert [type(o) for o in outcomes] == [QueryError, QueryError, NotFound]
        assert sorted(registry.calls) == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_hung_call_times_out(self, make_registry, alpha):
        registry = make_registry({"1": "hang", "7707083893": alpha})
        engine = LookupEngine(registry, timeout=0.05)

        outcomes = await engine.resolve(["1", "7707083893"])

        assert isinstance(outcomes[0], QueryError)
        assert "timed out" in outcomes[0].message
        assert isinstance(outcomes[1], Found)

    @pytest.mark.asyncio
    async def test_output_follows_input_order(self, engine):
        outcomes = await engine.resolve(["1655000000", "x", "7707083893"])
        assert [o.identifier for o in outcomes] == ["1655000000", "x", "7707083893"]

    @pytest.mark.asyncio
    async def test_duplicates_each_get_an_outcome(self, engine, registry):
        outcomes = await engine.resolve(["7707083893", "7707083893"])
        assert len(outcomes) == 2
        assert len(registry.calls) == 2


class TestFormatOutcomes:
    """Tests for format_outcomes function."""

    def test_single_result_is_not_numbered(self):
        text = format_outcomes([Found("1", 'JSC "Alpha"', "Moscow")])
        assert text == 'JSC "Alpha" — Moscow'

    def test_single_result_without_address(self):
        assert format_outcomes([NotFound("42")]) == "Company with INN 42 not found"

    def test_many_results_are_numbered_and_sorted(self):
        text = format_outcomes([
            Found("2", 'LLC "Beta"', "Kazan"),
            Found("1", 'JSC "Alpha"', "Moscow"),
        ])
        assert text == '1) JSC "Alpha" — Moscow\n2) LLC "Beta" — Kazan'

    def test_all_outcome_kinds(self):
        text = format_outcomes([
            Found("1", 'LLC "Beta"', "Kazan"),
            InvalidInput("abc"),
            QueryError("666", "Registry responded with status 500"),
            NotFound("42"),
        ])
        assert text.split("\n") == [
            "1) Company with INN 42 not found",
            "2) Error while querying INN 666 — Registry responded with status 500",
            "3) Invalid INN: abc",
            '4) LLC "Beta" — Kazan',
        ]

    def test_empty_address_has_no_dash(self):
        assert format_outcomes([Found("1", "Solo", "")]) == "Solo"

    def test_formatting_is_idempotent(self):
        outcomes = [Found("2", "B", "x"), Found("1", "A", "y"), InvalidInput("z")]
        assert format_outcomes(outcomes) == format_outcomes(outcomes)

    def test_input_list_is_not_reordered(self):
        outcomes = [Found("2", "B", "x"), Found("1", "A", "y")]
        format_outcomes(outcomes)
        assert [o.identifier for o in outcomes] == ["2", "1"]
