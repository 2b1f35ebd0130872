# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import replace
from typing import Any, Final

import pytest

from ssm_association.association.schema import (
    ASSOCIATION_SCHEMA,
    changed_fields,
    has_change,
    replacement_fields,
    requires_replacement,
)
from ssm_association.model import ManagedAssociation

observed: Final = ManagedAssociation(
    name="AWS-RunShellScript",
    association_id="assoc-1",
    instance_id="i-0123456789abcdef0",
    document_version="1",
    parameters={"commands": "uptime"},
    schedule_expression="rate(30 minutes)",
    targets=[{"key": "InstanceIds", "values": ["i-0123456789abcdef0"]}],
)


def test_schema_declares_every_record_field() -> None:
    assert set(ASSOCIATION_SCHEMA) == {
        "association_name",
        "association_id",
        "instance_id",
        "document_version",
        "name",
        "parameters",
        "schedule_expression",
        "output_location",
        "targets",
    }


def test_schema_limits_blocks() -> None:
    assert ASSOCIATION_SCHEMA["targets"].max_items == 5
    assert ASSOCIATION_SCHEMA["output_location"].max_items == 1


def test_force_new_fields() -> None:
    assert {
        field for field, schema in ASSOCIATION_SCHEMA.items() if schema.force_new
    } == {"name", "instance_id"}


def test_identical_records_have_no_changes() -> None:
    assert changed_fields(observed, replace(observed)) == frozenset()
    assert not requires_replacement(observed, replace(observed))


@pytest.mark.parametrize(
    "field, value",
    [
        ("name", "AWS-ApplyPatchBaseline"),
        ("instance_id", "i-0fedcba9876543210"),
        ("instance_id", None),
    ],
)
def test_changing_write_once_field_requires_replacement(field: str, value: Any) -> None:
    desired = replace(observed, **{field: value})

    assert requires_replacement(observed, desired)
    assert replacement_fields(observed, desired) == {field}


@pytest.mark.parametrize(
    "field, value",
    [
        ("association_name", "renamed"),
        ("document_version", "2"),
        ("parameters", {"commands": "whoami"}),
        ("schedule_expression", "rate(1 hour)"),
        ("output_location", [{"s3_bucket_name": "b"}]),
        ("targets", [{"key": "tag:Role", "values": ["web"]}]),
    ],
)
def test_changing_updatable_field_is_applied_in_place(field: str, value: Any) -> None:
    desired = replace(observed, **{field: value})

    assert changed_fields(observed, desired) == {field}
    assert not requires_replacement(observed, desired)


@pytest.mark.parametrize("field", ["document_version", "parameters", "targets"])
def test_undeclared_computed_field_keeps_observed_value(field: str) -> None:
    desired = replace(observed, **{field: None})

    assert not has_change(field, observed, desired)


def test_clearing_optional_field_is_a_change() -> None:
    desired = replace(observed, schedule_expression=None)

    assert has_change("schedule_expression", observed, desired)


def test_empty_and_unset_values_are_equivalent() -> None:
    prior = ManagedAssociation(name="doc1", association_name=None)
    desired = ManagedAssociation(name="doc1", association_name="")

    assert not has_change("association_name", prior, desired)


def test_association_id_is_not_a_declared_change() -> None:
    desired = replace(observed, association_id=None)

    assert changed_fields(observed, desired) == frozenset()
