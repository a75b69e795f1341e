"""Tests for HTTP methods (httpconv._methods)."""

import pytest

import httpconv
from httpconv import METHOD_GROUPS, HTTPConvenienceError, InvalidEntryError, Method, MethodGroup, Methods


@pytest.fixture
def methods() -> Methods:
    return Methods()


class TestValidity:
    """Tests for is_valid() and is_among()."""

    @pytest.mark.parametrize("verb", [m.value for m in Method])
    def test_standard_methods_valid(self, methods: Methods, verb: str) -> None:
        assert methods.is_valid(verb)

    @pytest.mark.parametrize("verb", ["get", "Patch", " delete "])
    def test_case_insensitive(self, methods: Methods, verb: str) -> None:
        assert methods.is_valid(verb)

    @pytest.mark.parametrize("verb", ["FETCH", "", None, 1])
    def test_invalid_methods(self, methods: Methods, verb: object) -> None:
        assert not methods.is_valid(verb)  # type: ignore[arg-type]

    def test_list_requires_every_method(self, methods: Methods) -> None:
        assert methods.is_valid(["GET", "post"])
        assert not methods.is_valid(["GET", "FETCH"])

    def test_is_among(self, methods: Methods) -> None:
        assert methods.is_among("get", ["GET", "HEAD"])
        assert not methods.is_among("POST", ["GET", "HEAD"])
        assert methods.is_among(["get", "head"], {"a": "GET", "b": "HEAD"})
        assert methods.is_among("OPTIONS")

    @pytest.mark.parametrize("allowed", [5, 1.5])
    def test_is_among_non_iterable_allowed(self, methods: Methods, allowed: object) -> None:
        assert not methods.is_among("GET", allowed)  # type: ignore[arg-type]


class TestGroups:
    """Tests for group queries."""

    def test_get_is_safe_idempotent_and_cacheable(self, methods: Methods) -> None:
        assert methods.of_groups("GET") == ["safe", "idempotent", "cacheable"]
        assert methods.of_group("GET") == "safe"

    def test_in_group_any_of(self, methods: Methods) -> None:
        assert methods.in_group("POST", ["idempotent", "cacheable"])

    def test_in_group_all_of(self, methods: Methods) -> None:
        assert not methods.in_group("POST", ["idempotent", "cacheable"], match_all=True)
        assert methods.in_group("GET", [MethodGroup.SAFE, MethodGroup.CACHEABLE], match_all=True)

    def test_preflight_methods(self, methods: Methods) -> None:
        assert methods.groups()["preflight"] == ["OPTIONS", "TRACE"]

    def test_unknown_method_has_no_groups(self, methods: Methods) -> None:
        assert methods.of_groups("FETCH") is None
        assert methods.of_group("FETCH") is None
        assert not methods.in_group("FETCH", "safe")

    @pytest.mark.parametrize("group", [None, 5])
    def test_in_group_non_iterable_group(self, methods: Methods, group: object) -> None:
        assert not methods.in_group("GET", group)  # type: ignore[arg-type]

    def test_static_table_matches_registry(self, methods: Methods) -> None:
        for verb, groups in METHOD_GROUPS.items():
            assert methods.of_groups(verb) == list(groups)


class TestNormalize:
    """Tests for normalize()."""

    def test_upper_cases(self, methods: Methods) -> None:
        assert methods.normalize("patch") == "PATCH"

    def test_unknown_method(self, methods: Methods) -> None:
        with pytest.raises(
            HTTPConvenienceError,
            match="'fetch' should be a valid HTTP standard or custom method",
        ):
            methods.normalize("fetch")

    def test_non_string(self, methods: Methods) -> None:
        with pytest.raises(HTTPConvenienceError, match="cannot be coerced") as exc_info:
            methods.normalize(3)
        assert isinstance(exc_info.value.original, TypeError)


class TestCustomMethods:
    """Tests for extend() and reset()."""

    def test_extend_and_reset(self, methods: Methods) -> None:
        methods.extend([("LINK", ("idempotent",))])
        assert methods.is_extended
        assert methods.is_valid("link")
        assert methods.normalize("link") == "LINK"
        assert "LINK" in methods.groups()["idempotent"]
        assert "LINK" in methods.methods

        methods.reset()
        assert not methods.is_extended
        assert not methods.is_valid("LINK")
        assert methods.values() == [m.value for m in Method]

    def test_extend_replaces_previous_custom_methods(self, methods: Methods) -> None:
        methods.extend([("LINK", ())])
        methods.extend([("UNLINK", ())])
        assert methods.is_valid("UNLINK")
        assert not methods.is_valid("LINK")

    def test_extend_with_mapping(self, methods: Methods) -> None:
        methods.extend({"PURGE": {"method": "PURGE", "groups": ["special_purpose"]}})
        assert methods.of_group("purge") == "special_purpose"

    def test_custom_method_overrides_groups(self, methods: Methods) -> None:
        methods.extend([("POST", ("idempotent",))])
        assert methods.of_groups("POST") == ["idempotent"]
        methods.reset()
        assert methods.of_groups("POST") == ["non_idempotent", "cacheable"]

    def test_instances_are_isolated(self, methods: Methods) -> None:
        methods.extend([("LINK", ())])
        assert not httpconv.methods.is_valid("LINK")

    def test_default_instance(self) -> None:
        httpconv.methods.extend([("LINK", ())])
        assert httpconv.methods.is_valid("LINK")

    @pytest.mark.parametrize("row", [("LINK",), ("LINK", "safe", ".x"), ("LINK", "safe", ".x", 1)])
    def test_extend_row_must_be_verb_and_groups(self, methods: Methods, row: tuple) -> None:
        with pytest.raises(InvalidEntryError, match="must have 2 fields"):
            methods.extend([row])
        assert not methods.is_extended
