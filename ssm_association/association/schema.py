# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Optional

from ssm_association.model import MAX_OUTPUT_LOCATIONS, MAX_TARGETS, ManagedAssociation


@dataclass(frozen=True)
class FieldSchema:
    """
    how the framework treats a field of the record

    required/optional: whether the field must be declared
    computed: the service may supply a value when none was declared
    force_new: a change cannot be applied in place, the association must be replaced
    max_items: upper bound on the number of blocks of a list field
    """

    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    max_items: Optional[int] = None


ASSOCIATION_SCHEMA: Final[Mapping[str, FieldSchema]] = {
    "association_name": FieldSchema(optional=True),
    "association_id": FieldSchema(computed=True),
    "instance_id": FieldSchema(optional=True, force_new=True),
    "document_version": FieldSchema(optional=True, computed=True),
    "name": FieldSchema(required=True, force_new=True),
    "parameters": FieldSchema(optional=True, computed=True),
    "schedule_expression": FieldSchema(optional=True),
    "output_location": FieldSchema(optional=True, max_items=MAX_OUTPUT_LOCATIONS),
    "targets": FieldSchema(optional=True, computed=True, max_items=MAX_TARGETS),
}

# fields whose change is sent to the service by an update
UPDATE_TRACKED_FIELDS: Final = frozenset(
    {
        "association_name",
        "document_version",
        "schedule_expression",
        "parameters",
        "output_location",
        "targets",
    }
)


def _normalize(value: Any) -> Any:
    # empty strings and collections are equivalent to an unset field
    return value if value else None


def has_change(field: str, prior: ManagedAssociation, desired: ManagedAssociation) -> bool:
    """
    whether the declared value of `field` differs from the last observed one

    a computed field that is not declared keeps the value observed from the service
    """
    schema = ASSOCIATION_SCHEMA[field]
    desired_value = _normalize(getattr(desired, field))
    if schema.computed and desired_value is None:
        return False
    return bool(_normalize(getattr(prior, field)) != desired_value)


def changed_fields(
    prior: ManagedAssociation, desired: ManagedAssociation
) -> frozenset[str]:
    return frozenset(
        field
        for field, schema in ASSOCIATION_SCHEMA.items()
        if (schema.required or schema.optional) and has_change(field, prior, desired)
    )


def replacement_fields(
    prior: ManagedAssociation, desired: ManagedAssociation
) -> frozenset[str]:
    return frozenset(
        field
        for field in changed_fields(prior, desired)
        if ASSOCIATION_SCHEMA[field].force_new
    )


def requires_replacement(
    prior: ManagedAssociation, desired: ManagedAssociation
) -> bool:
    """true when the change must be applied by deleting and recreating the association"""
    return bool(replacement_fields(prior, desired))
