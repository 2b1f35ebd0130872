# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable, Mapping
from typing import Any, Final

from ssm_association.association.errors import UnsupportedSchemaVersion
from ssm_association.observability.powertools_logging import powertools_logger

logger = powertools_logger()

SCHEMA_VERSION: Final = 1

StateFields = dict[str, Any]


def _migrate_v0_to_v1(fields: StateFields) -> StateFields:
    """version 0 records carried the association id only as the record id"""
    if not fields:
        return fields
    logger.info(f"migrating SSM association state v0 -> v1: {fields.get('id')}")
    fields["association_id"] = fields.get("id")
    return fields


_MIGRATIONS: Final[Mapping[int, Callable[[StateFields], StateFields]]] = {
    0: _migrate_v0_to_v1,
}


def needs_migration(version: int) -> bool:
    return version < SCHEMA_VERSION


def migrate_state(version: int, fields: Mapping[str, Any]) -> StateFields:
    """
    upgrade the raw fields of a persisted record from `version` to SCHEMA_VERSION

    migrations are applied one version at a time, the input mapping is not modified
    """
    if version < 0 or version > SCHEMA_VERSION:
        raise UnsupportedSchemaVersion(
            f"Unable to migrate SSM association state from version {version}, "
            f"current version is {SCHEMA_VERSION}"
        )

    migrated: StateFields = dict(fields)
    for step in range(version, SCHEMA_VERSION):
        migrated = _MIGRATIONS[step](migrated)
    return migrated
