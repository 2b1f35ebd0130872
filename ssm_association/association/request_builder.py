# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Final, Optional

from ssm_association.association.shape import (
    expand_output_location,
    expand_parameters,
    expand_targets,
)
from ssm_association.model import ManagedAssociation

# record field -> (request key, conversion to the request shape)
_OPTIONAL_REQUEST_FIELDS: Final[Mapping[str, tuple[str, Callable[[Any], Any]]]] = {
    "association_name": ("AssociationName", str),
    "instance_id": ("InstanceId", str),
    "document_version": ("DocumentVersion", str),
    "schedule_expression": ("ScheduleExpression", str),
    "parameters": ("Parameters", expand_parameters),
    "targets": ("Targets", expand_targets),
    "output_location": ("OutputLocation", expand_output_location),
}

CREATE_OPTIONAL_FIELDS: Final = frozenset(_OPTIONAL_REQUEST_FIELDS)

# instance_id forces replacement and is not accepted by UpdateAssociation
UPDATE_OPTIONAL_FIELDS: Final = CREATE_OPTIONAL_FIELDS - {"instance_id"}


def present_fields(record: ManagedAssociation) -> frozenset[str]:
    """
    optional fields of the record that hold a value

    empty strings and empty collections are treated as not set
    """
    return frozenset(
        field for field in CREATE_OPTIONAL_FIELDS if getattr(record, field)
    )


def _optional_fields(
    record: ManagedAssociation, present: Iterable[str], allowed: frozenset[str]
) -> dict[str, Any]:
    request: dict[str, Any] = {}
    for field in sorted(allowed.intersection(present)):
        request_key, convert = _OPTIONAL_REQUEST_FIELDS[field]
        value = getattr(record, field)
        if value:
            request[request_key] = convert(value)
    return request


def build_create_association_request(
    desired: ManagedAssociation, present: Optional[Iterable[str]] = None
) -> dict[str, Any]:
    """keyword arguments for `create_association`: the document name plus every optional field that is set"""
    if present is None:
        present = present_fields(desired)
    return {
        "Name": desired.name,
        **_optional_fields(desired, present, CREATE_OPTIONAL_FIELDS),
    }


def build_update_association_request(
    association_id: str,
    desired: ManagedAssociation,
    has_changes: bool,
    present: Optional[Iterable[str]] = None,
) -> dict[str, Any]:
    """
    keyword arguments for `update_association`

    The service stores every update as a new version replacing the previous configuration,
    so when any tracked field changed the request carries every optional field that is set.
    Fields that are no longer set are left out rather than cleared. Without changes only the
    identifier is sent.
    """
    request: dict[str, Any] = {"AssociationId": association_id}
    if has_changes:
        if present is None:
            present = present_fields(desired)
        request.update(_optional_fields(desired, present, UPDATE_OPTIONAL_FIELDS))
    return request
