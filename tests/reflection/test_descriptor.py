# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for type descriptors."""

import decimal
from collections.abc import Mapping, Sequence
from typing import Annotated, Any, Optional

import pytest
import sample_models
from sample_models import Account, Body, Colour, Person, Priority, Record, Renamed, Topic, TreeNode

from openapi_reflect.reflection.descriptor import Kind, Tag, describe, display_name, enum_base_kind, struct

# ###############
# Classification
# ###############


class TestDescribeKinds:
    @pytest.mark.parametrize(
        "hint, kind",
        [
            (str, Kind.STRING),
            (bytes, Kind.STRING),
            (int, Kind.INTEGER),
            (float, Kind.NUMBER),
            (decimal.Decimal, Kind.NUMBER),
            (bool, Kind.BOOLEAN),
            (list[int], Kind.SLICE),
            (tuple[int, ...], Kind.SLICE),
            (set[str], Kind.SLICE),
            (Sequence[str], Kind.SLICE),
            (dict[str, int], Kind.MAP),
            (Mapping[str, int], Kind.MAP),
            (Optional[int], Kind.POINTER),
            (int | None, Kind.POINTER),
            (Any, Kind.INTERFACE),
            (object, Kind.INTERFACE),
            (Colour, Kind.ENUM),
            (Priority, Kind.ENUM),
            (Topic, Kind.STRUCT),
            (Account, Kind.STRUCT),
            (Body[Topic], Kind.STRUCT),
        ],
    )
    def test_kind(self, hint, kind):
        assert describe(hint).kind is kind

    @pytest.mark.parametrize("hint", [int | str, tuple[int, str], complex, len])
    def test_unsupported(self, hint):
        assert describe(hint).kind is Kind.UNSUPPORTED

    def test_annotated_is_unwrapped(self):
        descriptor = describe(Annotated[int, Tag(omitempty=True)])
        assert descriptor.kind is Kind.INTEGER
        assert descriptor.hint is int


class TestDescriptorNames:
    def test_builtin_has_no_package(self):
        descriptor = describe(str)
        assert descriptor.package_path == ""
        assert descriptor.name == "str"

    def test_struct_package_and_name(self):
        descriptor = describe(Topic)
        assert descriptor.package_path == "sample_models"
        assert descriptor.name == "Topic"
        assert descriptor.comment_name == "Topic"

    def test_generic_name_qualifies_arguments_only(self):
        descriptor = describe(Body[Topic])
        assert descriptor.package_path == "sample_models"
        assert descriptor.name == "Body[sample_models.Topic]"
        assert descriptor.comment_name == "Body"

    def test_anonymous_struct(self):
        descriptor = describe(Person)
        assert descriptor.kind is Kind.STRUCT
        assert descriptor.is_anonymous
        assert descriptor.package_path == ""
        assert descriptor.name == ""

    def test_unnamed_shapes(self):
        assert describe(list[int]).name == ""
        assert describe(Optional[Topic]).name == ""


# ###############
# Structure
# ###############


class TestElements:
    def test_slice_element(self):
        assert describe(list[Topic]).element().hint is Topic

    def test_map_key_and_value(self):
        descriptor = describe(dict[str, Topic])
        assert descriptor.key().kind is Kind.STRING
        assert descriptor.element().hint is Topic

    def test_pointer_element(self):
        assert describe(Optional[Topic]).element().hint is Topic

    def test_bare_containers_default_to_any(self):
        assert describe(list).element().kind is Kind.INTERFACE
        assert describe(dict).key().kind is Kind.STRING

    def test_element_of_struct_is_an_error(self):
        with pytest.raises(TypeError):
            describe(Topic).element()


class TestFields:
    def test_dataclass_fields_in_declaration_order(self):
        names = [f.serialized_name for f in describe(Topic).fields()]
        assert names == ["namespace", "topic", "private"]

    def test_tags(self):
        fields = {f.attribute: f for f in describe(Record).fields()}
        assert fields["audit"].embedded
        assert fields["note"].omitempty
        assert not fields["note"].required
        assert fields["parent_id"].is_pointer
        assert not fields["parent_id"].required
        assert fields["title"].required

    def test_renamed_and_private_fields(self):
        """Tag names override attribute names; underscore fields are hidden."""
        fields = describe(Renamed).fields()
        assert [(f.attribute, f.serialized_name) for f in fields] == [("user_id", "userId")]

    def test_generic_parameters_are_substituted(self):
        fields = {f.attribute: f for f in describe(Body[Topic]).fields()}
        assert fields["data"].type.hint is Topic
        assert fields["code"].type.kind is Kind.INTEGER

    def test_forward_references(self):
        fields = {f.attribute: f for f in describe(TreeNode).fields()}
        assert fields["children"].type.element().hint is TreeNode
        assert fields["parent"].type.element().hint is TreeNode

    def test_pydantic_fields_use_aliases(self):
        fields = {f.attribute: f for f in describe(Account).fields()}
        assert fields["account_id"].serialized_name == "accountId"
        assert fields["email"].required
        assert fields["nickname"].omitempty
        assert fields["nickname"].is_pointer

    def test_anonymous_struct_fields(self):
        assert [f.serialized_name for f in describe(Person).fields()] == ["name", "age"]


class TestEnums:
    def test_string_values(self):
        descriptor = describe(Colour)
        assert descriptor.enum_values() == ["red", "green"]
        assert descriptor.enum_base() is Kind.STRING

    def test_integer_values(self):
        assert describe(Priority).enum_base() is Kind.INTEGER

    @pytest.mark.parametrize(
        "values, expected",
        [
            ([], None),
            (["a", "b"], Kind.STRING),
            ([1, 2], Kind.INTEGER),
            ([True, False], None),
            (["a", 1], None),
        ],
    )
    def test_enum_base_kind(self, values, expected):
        assert enum_base_kind(values) is expected


# ###############
# Display names
# ###############


class TestDisplayName:
    def test_qualified_class(self):
        assert display_name(Topic) == "sample_models.Topic"
        assert display_name(Topic, qualified=False) == "Topic"

    def test_generics(self):
        assert display_name(dict[str, list[int]]) == "dict[str, list[int]]"
        assert display_name(Optional[Topic]) == "Optional[sample_models.Topic]"

    def test_anonymous_struct(self):
        assert display_name(Person) == "struct{name str; age int}"

    def test_struct_factory_produces_distinct_types(self):
        assert struct(a=int) is not struct(a=int)
        assert sample_models.Person is Person
