# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for type and field documentation lookup."""

import pytest

from openapi_reflect.errors import CommentLookupError
from openapi_reflect.reflection.comments import CommentStore, is_deprecated, load_module_comments, parse_comments

# ###############
# Parsing
# ###############

_SOURCE = '''
class Order:
    """An order placed by a customer."""

    # Identifier assigned by the shop.
    # Never reused.
    order_id: str
    total: int  # In cents.
    status: str
    """Current processing state."""
    secret: str
    untouched = 3

    class Line:
        """One line of an order."""

        sku: str  # Stock keeping unit.


def helper():
    """Not a type."""
'''


class TestParseComments:
    def test_class_docstring(self):
        assert parse_comments(_SOURCE)["Order"] == "An order placed by a customer."

    def test_comment_block_above(self):
        assert parse_comments(_SOURCE)["Order.order_id"] == "Identifier assigned by the shop.\nNever reused."

    def test_trailing_comment(self):
        assert parse_comments(_SOURCE)["Order.total"] == "In cents."

    def test_attribute_docstring(self):
        assert parse_comments(_SOURCE)["Order.status"] == "Current processing state."

    def test_undocumented_fields_are_absent(self):
        comments = parse_comments(_SOURCE)
        assert "Order.secret" not in comments
        assert "Order.untouched" not in comments

    def test_nested_classes(self):
        comments = parse_comments(_SOURCE)
        assert comments["Order.Line"] == "One line of an order."
        assert comments["Order.Line.sku"] == "Stock keeping unit."

    def test_functions_are_ignored(self):
        assert "helper" not in parse_comments(_SOURCE)

    def test_colon_after_hash_is_dropped(self):
        assert parse_comments("class A:\n    x: int  #: The x.\n")["A.x"] == "The x."

    def test_syntax_error(self):
        with pytest.raises(SyntaxError):
            parse_comments("class :\n")


@pytest.mark.parametrize(
    "comment, expected",
    [
        ("Deprecated: use id.", True),
        ("The name.\nDeprecated: use id.", True),
        ("  Deprecated: indented.", True),
        ("Not deprecated.", False),
        ("", False),
        ("deprecated: lower case.", False),
    ],
)
def test_is_deprecated(comment, expected):
    assert is_deprecated(comment) is expected


# ###############
# Loading
# ###############


class TestLoadModuleComments:
    def test_loads_installed_module(self):
        comments = load_module_comments("sample_models")
        assert comments["Topic"] == "A named channel that messages are published to."
        assert comments["Body.code"] == "Application status code."

    def test_unknown_module(self):
        with pytest.raises(CommentLookupError, match="cannot import"):
            load_module_comments("no_such_module_for_openapi_reflect")

    def test_module_without_source(self):
        with pytest.raises(CommentLookupError, match="cannot read source"):
            load_module_comments("sys")


class TestCommentStore:
    def test_lookup_type_and_field(self):
        store = CommentStore()
        assert store.lookup("sample_models", "Topic") == ("A named channel that messages are published to.", False)
        assert store.lookup("sample_models", "Topic", "topic") == ("Deprecated: topics are addressed by id.", True)

    def test_missing_comment(self):
        assert CommentStore().lookup("sample_models", "Topic", "private") == ("", False)

    def test_generic_suffix_is_ignored(self):
        store = CommentStore()
        assert store.lookup("sample_models", "Body[sample_models.Topic]")[0] == "Envelope of every response."

    def test_empty_package_is_never_loaded(self):
        calls = []
        store = CommentStore(loader=lambda pkg: calls.append(pkg) or {})
        assert store.lookup("", "struct") == ("", False)
        assert calls == []

    def test_each_package_is_loaded_once(self):
        calls = []

        def loader(pkg):
            calls.append(pkg)
            return {"A": "doc"}

        store = CommentStore(loader=loader)
        store.lookup("pkg", "A")
        store.lookup("pkg", "A", "x")
        store.get("pkg")
        assert calls == ["pkg"]

        store.clear()
        store.lookup("pkg", "A")
        assert calls == ["pkg", "pkg"]

    def test_loader_errors_propagate(self):
        def loader(pkg):
            raise CommentLookupError(f"no source for {pkg}")

        with pytest.raises(CommentLookupError, match="no source for pkg"):
            CommentStore(loader=loader).lookup("pkg", "A")
