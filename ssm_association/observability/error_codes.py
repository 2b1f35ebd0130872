# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum


class ErrorCode(str, Enum):
    CREATE_FAILED = "CreateFailed"
    READ_FAILED = "ReadFailed"
    UPDATE_FAILED = "UpdateFailed"
    DELETE_FAILED = "DeleteFailed"
    MALFORMED_RESPONSE = "MalformedResponse"
    INVALID_DEFINITION = "InvalidDefinition"
    REPLACEMENT_REQUIRED = "ReplacementRequired"
    UNSUPPORTED_SCHEMA_VERSION = "UnsupportedSchemaVersion"
    UNKNOWN_ERROR = "UnknownError"
