# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Optional

from ssm_association.model import (
    InvalidAssociationDefinition,
    ManagedAssociation,
    OutputLocationBlock,
    TargetBlock,
)

if TYPE_CHECKING:
    from mypy_boto3_ssm.type_defs import (
        AssociationDescriptionTypeDef,
        InstanceAssociationOutputLocationTypeDef,
        S3OutputLocationTypeDef,
        TargetTypeDef,
    )
else:
    AssociationDescriptionTypeDef = object
    InstanceAssociationOutputLocationTypeDef = object
    S3OutputLocationTypeDef = object
    TargetTypeDef = object


def expand_parameters(parameters: Mapping[str, str]) -> dict[str, list[str]]:
    """the SSM API models every document parameter as multi-valued"""
    return {key: [value] for key, value in parameters.items()}


def flatten_parameters(
    parameters: Optional[Mapping[str, Sequence[str]]],
) -> dict[str, str]:
    """
    keep the first value of each parameter

    parameters holding more than one value were not written by this plugin and cannot be
    represented by a single-valued map, parameters holding no value are dropped
    """
    if not parameters:
        return {}
    return {key: values[0] for key, values in parameters.items() if values}


def expand_targets(targets: Sequence[TargetBlock]) -> list[TargetTypeDef]:
    return [
        {"Key": target["key"], "Values": list(target["values"])} for target in targets
    ]


def flatten_targets(targets: Optional[Sequence[TargetTypeDef]]) -> list[TargetBlock]:
    if not targets:
        return []
    return [
        {"key": target["Key"], "values": list(target["Values"])} for target in targets
    ]


def expand_output_location(
    config: Optional[Sequence[OutputLocationBlock]],
) -> Optional[InstanceAssociationOutputLocationTypeDef]:
    if not config:
        return None

    # at most one location can be configured
    location_config = config[0]

    s3_location: S3OutputLocationTypeDef = {
        "OutputS3BucketName": location_config["s3_bucket_name"],
    }
    if location_config.get("s3_key_prefix"):
        s3_location["OutputS3KeyPrefix"] = location_config["s3_key_prefix"]

    return {"S3Location": s3_location}


def flatten_output_location(
    location: Optional[InstanceAssociationOutputLocationTypeDef],
) -> list[OutputLocationBlock]:
    if not location or "S3Location" not in location:
        return []

    s3_location = location["S3Location"]
    if not s3_location.get("OutputS3BucketName"):
        raise InvalidAssociationDefinition("output location has no OutputS3BucketName")

    item: OutputLocationBlock = {"s3_bucket_name": s3_location["OutputS3BucketName"]}
    # an empty prefix is never sent, see expand_output_location
    if s3_location.get("OutputS3KeyPrefix"):
        item["s3_key_prefix"] = s3_location["OutputS3KeyPrefix"]

    return [item]


def association_from_description(
    description: AssociationDescriptionTypeDef,
) -> ManagedAssociation:
    """
    build a record holding the service's view of an association

    raises InvalidAssociationDefinition if the description does not name a document or
    its output location has no bucket
    """
    if "Name" not in description:
        raise InvalidAssociationDefinition("association description has no Name")

    return ManagedAssociation(
        name=description["Name"],
        association_id=description.get("AssociationId"),
        association_name=description.get("AssociationName"),
        instance_id=description.get("InstanceId"),
        document_version=description.get("DocumentVersion"),
        parameters=flatten_parameters(description.get("Parameters")) or None,
        schedule_expression=description.get("ScheduleExpression"),
        output_location=flatten_output_location(description.get("OutputLocation"))
        or None,
        targets=flatten_targets(description.get("Targets")) or None,
    )
