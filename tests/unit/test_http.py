"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import pytest

from aws_sigv4 import Field, Fields


def test_field_as_string():
    field = Field(name="accept", values=["text/html", "application/json"])
    assert field.as_string() == "text/html,application/json"
    assert field.as_string(delimiter=", ") == "text/html, application/json"


class TestFields:
    def test_add_merges_case_insensitively(self):
        fields = Fields()
        fields.add("X-Test", "one")
        fields.add("x-TEST", "two")

        assert len(fields) == 1
        assert fields["X-Test"].name == "x-test"
        assert fields["x-test"].values == ["one", "two"]

    def test_set_field_replaces(self):
        fields = Fields({"Authorization": "old"})
        fields.set_field(Field(name="AUTHORIZATION", values=["new"]))

        assert fields["authorization"].values == ["new"]

    def test_preserves_insertion_order(self):
        fields = Fields({"B": "2", "a": "1", "C": ["3", "4"]})
        assert [field.name for field in fields] == ["b", "a", "c"]
        assert fields["c"].values == ["3", "4"]

    def test_contains_and_get(self):
        fields = Fields({"Host": "example.com"})
        assert "HOST" in fields
        assert "missing" not in fields
        assert 42 not in fields
        assert fields.get("host").as_string() == "example.com"
        assert fields.get("missing") is None

    def test_delete(self):
        fields = Fields({"Host": "example.com"})
        del fields["HOST"]
        assert len(fields) == 0
        with pytest.raises(KeyError):
            fields["host"]

    def test_copy_from_fields(self):
        original = Fields({"Host": "example.com"})
        copy = Fields(original)
        copy.add("host", "other.com")

        assert original["host"].values == ["example.com"]
        assert copy == Fields({"host": ["example.com", "other.com"]})

    def test_to_dict(self):
        fields = Fields({"X-Multi": ["a", "b"], "Host": "example.com"})
        assert fields.to_dict() == {"x-multi": "a,b", "host": "example.com"}
