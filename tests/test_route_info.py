"""Tests for literal route info extraction from definePage()."""

import pytest

from routemacro.core.config.transform_config import TransformConfig
from routemacro.core.exceptions import MacroShapeError
from routemacro.core.models import RouteInfo, SourceDocument
from routemacro.transform import extract_route_info

PAGE_ID = "src/pages/users/[id].vue"


def _extract(body: str, lang: str = "ts", config: TransformConfig | None = None) -> RouteInfo | None:
    text = f'<script setup lang="{lang}">\n{body}\n</script>\n'
    return extract_route_info(SourceDocument(id=PAGE_ID, text=text), config)


class TestLiteralFields:
    """Literal name, path and alias values are read as-is."""

    def test_all_fields(self):
        info = _extract(
            "definePage({ name: 'user-detail', path: '/users/:id', "
            "alias: ['/u/:id', '/user/:id'] })"
        )

        assert info == RouteInfo(
            name="user-detail", path="/users/:id", alias=("/u/:id", "/user/:id")
        )
        assert info.warnings == ()
        assert info.as_dict() == {
            "name": "user-detail",
            "path": "/users/:id",
            "alias": ["/u/:id", "/user/:id"],
        }

    def test_absent_fields_stay_unset(self):
        info = _extract("definePage({ meta: { requiresAuth: true } })")

        assert info == RouteInfo()
        assert info.as_dict() == {}

    def test_double_quoted_and_escaped_strings(self):
        info = _extract(r'definePage({ name: "user\tdetail", path: "/café\x21" })')

        assert info is not None
        assert info.name == "user\tdetail"
        assert info.path == "/café!"

    def test_empty_string(self):
        info = _extract("definePage({ name: '' })")

        assert info is not None
        assert info.name == ""
        assert info.as_dict() == {"name": ""}

    def test_quoted_keys_are_ignored(self):
        info = _extract("definePage({ 'name': 'quoted', path: '/p' })")

        assert info == RouteInfo(path="/p")

    def test_computed_keys_are_ignored(self):
        info = _extract("definePage({ ['name']: 'computed', path: '/p' })")

        assert info == RouteInfo(path="/p")

    def test_nested_fields_are_ignored(self):
        info = _extract("definePage({ meta: { name: 'nested' } })")

        assert info == RouteInfo()

    def test_later_duplicate_key_wins(self):
        info = _extract("definePage({ path: '/first', path: '/second' })")

        assert info is not None
        assert info.path == "/second"

    def test_parenthesized_argument(self):
        info = _extract("definePage(({ name: 'wrapped' }))")

        assert info == RouteInfo(name="wrapped")

    def test_javascript_block(self):
        info = _extract("definePage({ path: '/js' })", lang="js")

        assert info == RouteInfo(path="/js")


class TestNonLiteralWarnings:
    """Dynamic values are skipped with a warning, never fatal."""

    def test_name_variable(self, log_messages):
        info = _extract("const someVariable = 'x'\ndefinePage({ name: someVariable })")

        assert info is not None
        assert info.as_dict() == {}
        assert len(info.warnings) == 1
        assert "route name must be a string literal" in info.warnings[0]
        assert PAGE_ID in info.warnings[0]
        assert ("WARNING", info.warnings[0]) in log_messages

    def test_template_literal_path(self):
        info = _extract("definePage({ path: `/users/${1}`, name: 'users' })")

        assert info is not None
        assert info.path is None
        assert info.name == "users"
        assert len(info.warnings) == 1
        assert "route path must be a string literal" in info.warnings[0]

    def test_shorthand_property(self):
        info = _extract("definePage({ path })")

        assert info is not None
        assert info.path is None
        assert len(info.warnings) == 1

    def test_warnings_are_not_part_of_equality(self):
        info = _extract("definePage({ name: String(1), path: '/p' })")

        assert info == RouteInfo(path="/p")
        assert info.warnings


class TestAlias:
    """alias accepts a string or an array of strings."""

    def test_single_string(self):
        info = _extract("definePage({ alias: '/other' })")

        assert info is not None
        assert info.alias == ("/other",)

    def test_array_drops_non_strings_silently(self):
        info = _extract("definePage({ alias: ['/a', someVar, 42, '/b'] })")

        assert info is not None
        assert info.alias == ("/a", "/b")
        assert info.warnings == ()

    def test_empty_array(self):
        info = _extract("definePage({ alias: [] })")

        assert info is not None
        assert info.alias == ()
        assert info.as_dict() == {"alias": []}

    @pytest.mark.parametrize("value", ["aliases", "{ a: '/a' }", "`/t`", "42"])
    def test_other_shapes_warn(self, value):
        info = _extract(f"definePage({{ alias: {value} }})")

        assert info is not None
        assert info.alias is None
        assert len(info.warnings) == 1
        assert "route alias must be a string literal or an array" in info.warnings[0]


class TestArgumentShape:
    """The macro argument itself must be an object literal."""

    @pytest.mark.parametrize(
        "call",
        [
            "definePage()",
            "definePage(routeConfig)",
            "definePage('/path')",
            "definePage({ name: 'a' }, { path: '/b' })",
            "definePage(...configs)",
        ],
    )
    def test_wrong_shape_fails(self, call):
        with pytest.raises(MacroShapeError, match="expects an object expression") as exc_info:
            _extract(call)

        assert exc_info.value.document_id == PAGE_ID

    def test_absent_macro(self):
        assert _extract("const a = 1") is None

    def test_custom_macro_name(self):
        config = TransformConfig(macro_name="defineRoute")

        info = _extract("defineRoute({ name: 'custom' })", config=config)

        assert info == RouteInfo(name="custom")


class TestScriptAttributes:
    """Script tags with rich attribute values still parse."""

    def test_generic_attribute(self):
        text = (
            '<script setup lang="ts" generic="T extends Record<string, unknown>">\n'
            "definePage({ name: 'g' })\n"
            "</script>\n"
        )

        info = extract_route_info(SourceDocument(id=PAGE_ID, text=text))

        assert info == RouteInfo(name="g")
