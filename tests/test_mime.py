"""Tests for MIME types (httpconv._mime)."""

import pytest

import httpconv
from httpconv import (
    INAPPLICABLE,
    HTTPConvenienceError,
    InvalidEntryError,
    MIMEAttribute,
    MIMEGroup,
    MIMEType,
    MIMETypes,
)


@pytest.fixture
def mime() -> MIMETypes:
    return MIMETypes()


class TestValidity:
    """Tests for is_valid() by type, group and extension."""

    @pytest.mark.parametrize("value", ["application/json", "Application/JSON", "font/woff2"])
    def test_valid_types(self, mime: MIMETypes, value: str) -> None:
        assert mime.is_valid(value)

    @pytest.mark.parametrize("value", ["invalid/type", "", None])
    def test_invalid_types(self, mime: MIMETypes, value: object) -> None:
        assert not mime.is_valid(value)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["gz", ".gz", "json", ".webm"])
    def test_valid_extensions(self, mime: MIMETypes, value: str) -> None:
        assert mime.is_valid(value, MIMEAttribute.EXTENSION)

    @pytest.mark.parametrize("value", [INAPPLICABLE, ".exe", ""])
    def test_invalid_extensions(self, mime: MIMETypes, value: str) -> None:
        assert not mime.is_valid(value, MIMEAttribute.EXTENSION)

    def test_attribute_as_plain_string(self, mime: MIMETypes) -> None:
        assert mime.is_valid("pdf", "extension")  # type: ignore[arg-type]

    @pytest.mark.parametrize("attribute", ["ext", "", None, 3])
    def test_unknown_attribute(self, mime: MIMETypes, attribute: object) -> None:
        assert not mime.is_valid("gz", attribute)  # type: ignore[arg-type]

    def test_valid_groups(self, mime: MIMETypes) -> None:
        for group in MIMEGroup:
            assert mime.is_valid(group, MIMEAttribute.GROUP)
        assert not mime.is_valid("CUSTOM", MIMEAttribute.GROUP)

    def test_is_among(self, mime: MIMETypes) -> None:
        assert mime.is_among("text/html")
        assert mime.is_among("TEXT/HTML", ["text/html", "text/plain"])
        assert mime.is_among("text/html", [MIMEType("text/html", "TEXT", ".html")])
        assert mime.is_among(["text/html", "text/css"], {"a": "text/css", "b": "text/html"})
        assert not mime.is_among("application/json", ["text/html"])

    @pytest.mark.parametrize("types", [5, 1.5])
    def test_is_among_non_iterable_types(self, mime: MIMETypes, types: object) -> None:
        assert not mime.is_among("text/html", types)  # type: ignore[arg-type]

    def test_in_group_non_iterable_group(self, mime: MIMETypes) -> None:
        assert not mime.in_group("text/html", None)  # type: ignore[arg-type]


class TestGroups:
    """Tests for of_group(), in_group() and groups()."""

    def test_of_group(self, mime: MIMETypes) -> None:
        assert mime.of_group("application/gzip") == MIMEGroup.APPLICATION
        assert mime.of_group("multipart/form-data") == "MULTIPART"
        assert mime.of_group("invalid/type") is None

    def test_in_group(self, mime: MIMETypes) -> None:
        assert mime.in_group("image/png", "IMAGE")
        assert mime.in_group("image/png", ["TEXT", "IMAGE"])
        assert not mime.in_group("image/png", ["TEXT", "IMAGE"], match_all=True)

    def test_groups(self, mime: MIMETypes) -> None:
        groups = mime.groups()
        assert set(groups) == {g.value for g in MIMEGroup}
        assert MIMEType("font/ttf", "FONT", ".ttf") in groups["FONT"]


class TestLookups:
    """Tests for pick_by(), find_by(), types and extensions()."""

    def test_pick_by_extension(self, mime: MIMETypes) -> None:
        assert mime.pick_by(MIMEAttribute.EXTENSION, "gz") == MIMEType(
            "application/gzip", "APPLICATION", ".gz"
        )
        assert mime.pick_by(MIMEAttribute.EXTENSION, ".exe") is None

    def test_unknown_attribute_finds_nothing(self, mime: MIMETypes) -> None:
        assert mime.find_by("ext", "gz") == []  # type: ignore[arg-type]
        assert mime.pick_by("ext", "gz") is None  # type: ignore[arg-type]

    def test_shared_extension_resolves_to_every_type(self, mime: MIMETypes) -> None:
        found = mime.find_by(MIMEAttribute.EXTENSION, ".sql")
        assert [m.type for m in found] == ["application/sql", "application/x-sql"]
        picked = mime.pick_by(MIMEAttribute.EXTENSION, "sql")
        assert picked is not None
        assert picked.type == "application/sql"

    def test_find_by_xml(self, mime: MIMETypes) -> None:
        found = mime.find_by(MIMEAttribute.EXTENSION, "xml")
        assert {m.type for m in found} == {"text/xml", "application/xml"}

    def test_find_by_group(self, mime: MIMETypes) -> None:
        found = mime.find_by(MIMEAttribute.GROUP, "MULTIPART")
        assert all(m.extension == INAPPLICABLE for m in found)
        assert len(found) == 4

    def test_find_by_inapplicable(self, mime: MIMETypes) -> None:
        assert mime.find_by(MIMEAttribute.EXTENSION, INAPPLICABLE) == []

    def test_pick_by_type(self, mime: MIMETypes) -> None:
        picked = mime.pick_by(MIMEAttribute.TYPE, "TEXT/CSV")
        assert picked == MIMEType("text/csv", "TEXT", ".csv")

    def test_types_mapping(self, mime: MIMETypes) -> None:
        assert mime.types["application/json"].extension == ".json"
        assert mime.types["multipart/mixed"].extension == INAPPLICABLE

    def test_extensions_exclude_inapplicable(self, mime: MIMETypes) -> None:
        extensions = mime.extensions()
        assert ".json" in extensions
        assert INAPPLICABLE not in extensions

    def test_record_has_no_disambiguator(self, mime: MIMETypes) -> None:
        assert mime.types["application/x-sql"].as_dict() == {
            "type": "application/x-sql",
            "group": "APPLICATION",
            "extension": ".sql",
        }


class TestNormalize:
    """Tests for normalize()."""

    def test_lower_cases(self, mime: MIMETypes) -> None:
        assert mime.normalize("Application/JSON") == "application/json"

    def test_unknown(self, mime: MIMETypes) -> None:
        with pytest.raises(HTTPConvenienceError, match="should be a valid MIME type"):
            mime.normalize("invalid/type")

    def test_non_string(self, mime: MIMETypes) -> None:
        with pytest.raises(HTTPConvenienceError, match="cannot be coerced"):
            mime.normalize(None)


class TestCustomTypes:
    """Tests for extend() and reset()."""

    def test_extend_mapping_and_reset(self, mime: MIMETypes) -> None:
        mime.extend({"custom/json": {"type": "custom/json", "group": "CUSTOM", "extension": ".json"}})
        assert mime.is_extended
        assert mime.is_valid("custom/json")
        assert mime.is_among("custom/json")
        assert mime.is_valid("CUSTOM", MIMEAttribute.GROUP)
        assert [m.type for m in mime.find_by(MIMEAttribute.EXTENSION, "json")] == [
            "application/json",
            "custom/json",
        ]

        mime.reset()
        assert not mime.is_extended
        assert not mime.is_among("custom/json")
        assert not mime.is_valid("custom/json")

    def test_extend_rows_adds_missing_dot(self, mime: MIMETypes) -> None:
        mime.extend([("application/x-custom", "APPLICATION", "cst")])
        assert mime.types["application/x-custom"].extension == ".cst"
        assert mime.is_valid("cst", MIMEAttribute.EXTENSION)

    def test_extend_with_records(self, mime: MIMETypes) -> None:
        mime.extend({"custom/x": MIMEType("custom/x", "CUSTOM", "x")})
        assert mime.pick_by(MIMEAttribute.EXTENSION, ".x") == MIMEType("custom/x", "CUSTOM", ".x")

    def test_custom_inapplicable_extension(self, mime: MIMETypes) -> None:
        mime.extend([("multipart/custom", "MULTIPART", INAPPLICABLE)])
        assert mime.types["multipart/custom"].extension == INAPPLICABLE
        assert not mime.is_valid(INAPPLICABLE, MIMEAttribute.EXTENSION)

    def test_extend_replaces(self, mime: MIMETypes) -> None:
        mime.extend([("custom/a", "CUSTOM", ".a")])
        mime.extend([("custom/b", "CUSTOM", ".b")])
        assert mime.is_valid("custom/b")
        assert not mime.is_valid("custom/a")

    def test_extend_malformed(self, mime: MIMETypes) -> None:
        with pytest.raises(InvalidEntryError):
            mime.extend({"custom/json": {"type": "custom/json", "group": "CUSTOM"}})

    @pytest.mark.parametrize(
        "row",
        [("custom/x",), ("custom/x", "CUSTOM"), ("custom/x", "CUSTOM", ".x", 1)],
    )
    def test_extend_row_must_be_type_group_extension(self, mime: MIMETypes, row: tuple) -> None:
        with pytest.raises(InvalidEntryError, match="must have 3 fields"):
            mime.extend([row])
        assert not mime.is_extended

    def test_default_instance(self) -> None:
        httpconv.mime_types.extend([("custom/json", "CUSTOM", ".json")])
        assert httpconv.mime_types.is_valid("custom/json")
        httpconv.mime_types.reset()
        assert not httpconv.mime_types.is_valid("custom/json")
