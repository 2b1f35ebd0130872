# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Resource plugin reconciling a declared AWS Systems Manager association.

shape
    Pure converters between the declarative blocks of a `ManagedAssociation` and the
    request/response shapes of the SSM API.

request_builder
    Builds `create_association` and `update_association` payloads from a record.

schema
    Field modes of the declared schema and the change/replacement rules derived from
    them.

resource
    `SSMAssociationResource` implementing create, read, update and delete.

migration
    Current schema version and the hook upgrading persisted state written by older
    versions.
"""
