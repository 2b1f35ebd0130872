# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from dataclasses import fields as dataclass_fields
from typing import Any, Final, NotRequired, Optional, TypedDict

from ssm_association.association.errors import AssociationError
from ssm_association.association.migration import SCHEMA_VERSION, migrate_state
from ssm_association.observability.error_codes import ErrorCode
from ssm_association.util.validation import (
    ValidationException,
    require_str,
    validate_block_list,
    validate_string,
    validate_string_list,
    validate_string_map,
)

MAX_TARGETS: Final = 5
MAX_OUTPUT_LOCATIONS: Final = 1


class InvalidAssociationDefinition(AssociationError):
    error_code = ErrorCode.INVALID_DEFINITION


class TargetBlock(TypedDict):
    key: str
    values: list[str]


class OutputLocationBlock(TypedDict):
    s3_bucket_name: str
    s3_key_prefix: NotRequired[str]


@dataclass(frozen=True)
class ManagedAssociation:
    """
    Declared and observed state of a single SSM association.

    The record has no local key: once created it is identified by the
    service-assigned `association_id`.

    Attributes:
        name: name of the SSM document, changing it forces replacement
        association_id: identifier assigned by the SSM service on creation
        association_name: optional user-provided name of the association
        instance_id: optional instance the association targets, changing it forces replacement
        document_version: version of the document, the service supplies a default when unset
        parameters: document parameters, one value per parameter name
        schedule_expression: cron or rate expression the association runs on
        output_location: at most one S3 location for command output
        targets: at most 5 target selectors
    """

    name: str
    association_id: Optional[str] = None
    association_name: Optional[str] = None
    instance_id: Optional[str] = None
    document_version: Optional[str] = None
    parameters: Optional[dict[str, str]] = None
    schedule_expression: Optional[str] = None
    output_location: Optional[list[OutputLocationBlock]] = None
    targets: Optional[list[TargetBlock]] = None

    def __post_init__(self) -> None:
        self.validate()

    @property
    def id(self) -> Optional[str]:
        return self.association_id

    def validate(self) -> None:
        if not self.name:
            raise InvalidAssociationDefinition("Association document name is required")

        if self.targets is not None:
            if len(self.targets) > MAX_TARGETS:
                raise InvalidAssociationDefinition(
                    f"At most {MAX_TARGETS} targets may be specified, found {len(self.targets)}"
                )
            for target in self.targets:
                if not target["key"]:
                    raise InvalidAssociationDefinition("Target key is required")
                if not target["values"]:
                    raise InvalidAssociationDefinition(
                        f"Target {target['key']} must specify at least one value"
                    )

        if self.output_location is not None:
            if len(self.output_location) > MAX_OUTPUT_LOCATIONS:
                raise InvalidAssociationDefinition(
                    f"At most {MAX_OUTPUT_LOCATIONS} output_location may be specified, "
                    f"found {len(self.output_location)}"
                )
            for location in self.output_location:
                if not location["s3_bucket_name"]:
                    raise InvalidAssociationDefinition(
                        "output_location requires s3_bucket_name"
                    )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ManagedAssociation":
        """
        build a record from a raw declarative mapping

        raises InvalidAssociationDefinition if the mapping does not conform to the schema
        """
        try:
            valid_keys = {field.name for field in dataclass_fields(ManagedAssociation)}
            for key in config.keys():
                if key not in valid_keys:
                    raise ValidationException(
                        f"{key} is not a valid parameter, valid parameters are {sorted(valid_keys)}"
                    )

            validate_string(config, "association_id", required=False)
            validate_string(config, "association_name", required=False)
            validate_string(config, "instance_id", required=False)
            validate_string(config, "document_version", required=False)
            validate_string(config, "schedule_expression", required=False)
            validate_string_map(config, "parameters", required=False)
            validate_block_list(config, "targets", required=False)
            validate_block_list(config, "output_location", required=False)

            return ManagedAssociation(
                name=require_str(config, "name"),
                association_id=config.get("association_id") or None,
                association_name=config.get("association_name") or None,
                instance_id=config.get("instance_id") or None,
                document_version=config.get("document_version") or None,
                parameters=dict(config["parameters"]) if config.get("parameters") else None,
                schedule_expression=config.get("schedule_expression") or None,
                output_location=_parse_output_location(config.get("output_location")),
                targets=_parse_targets(config.get("targets")),
            )
        except ValidationException as e:
            raise InvalidAssociationDefinition(e) from e

    def to_state(self) -> dict[str, Any]:
        """Return this record as flat persisted state tagged with the current schema version"""
        return {
            "schema_version": SCHEMA_VERSION,
            "id": self.association_id or "",
            "name": self.name,
            "association_id": self.association_id,
            "association_name": self.association_name,
            "instance_id": self.instance_id,
            "document_version": self.document_version,
            "parameters": dict(self.parameters) if self.parameters else None,
            "schedule_expression": self.schedule_expression,
            "output_location": (
                [dict(location) for location in self.output_location]
                if self.output_location
                else None
            ),
            "targets": (
                [
                    {"key": target["key"], "values": list(target["values"])}
                    for target in self.targets
                ]
                if self.targets
                else None
            ),
        }

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> "ManagedAssociation":
        """
        load a persisted record, upgrading it first if it was written by an older schema version

        raises UnsupportedSchemaVersion if the state was written by a newer schema version

        state written before versioning was introduced carries no tag and is treated as version 0
        """
        fields = dict(state)
        fields = migrate_state(fields.pop("schema_version", 0), fields)
        fields.pop("id", None)
        return ManagedAssociation.from_config(fields)


def _parse_targets(
    blocks: Optional[Sequence[Mapping[str, Any]]],
) -> Optional[list[TargetBlock]]:
    if not blocks:
        return None
    targets: list[TargetBlock] = []
    for block in blocks:
        validate_string_list(block, "values", required=True)
        targets.append(
            {"key": require_str(block, "key"), "values": list(block["values"])}
        )
    return targets


def _parse_output_location(
    blocks: Optional[Sequence[Mapping[str, Any]]],
) -> Optional[list[OutputLocationBlock]]:
    if not blocks:
        return None
    locations: list[OutputLocationBlock] = []
    for block in blocks:
        validate_string(block, "s3_key_prefix", required=False)
        location: OutputLocationBlock = {
            "s3_bucket_name": require_str(block, "s3_bucket_name")
        }
        if block.get("s3_key_prefix"):
            location["s3_key_prefix"] = block["s3_key_prefix"]
        locations.append(location)
    return locations
