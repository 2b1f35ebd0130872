# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Typed model of a declared SSM association.

Models are implemented as dataclasses. They are validated on creation and frozen.

The model implements two constructors: 1/ from the raw declarative configuration
supplied by the framework, and 2/ from persisted state (migrated to the current schema
version first). It also implements a transformation back to persisted state tagged with
the current schema version.

Associations
    Model: `ManagedAssociation`
        Raises `InvalidAssociationDefinition` on validation error
    Blocks: `TargetBlock`, `OutputLocationBlock`
"""
from .association import (
    MAX_OUTPUT_LOCATIONS,
    MAX_TARGETS,
    InvalidAssociationDefinition,
    ManagedAssociation,
    OutputLocationBlock,
    TargetBlock,
)

__all__ = [
    "MAX_OUTPUT_LOCATIONS",
    "MAX_TARGETS",
    "InvalidAssociationDefinition",
    "ManagedAssociation",
    "OutputLocationBlock",
    "TargetBlock",
]
