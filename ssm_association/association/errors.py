# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterable
from enum import Enum
from typing import Optional

from ssm_association.observability.error_codes import ErrorCode


class Operation(str, Enum):
    CREATE = "creating"
    READ = "reading"
    UPDATE = "updating"
    DELETE = "deleting"

    @property
    def error_code(self) -> ErrorCode:
        return {
            Operation.CREATE: ErrorCode.CREATE_FAILED,
            Operation.READ: ErrorCode.READ_FAILED,
            Operation.UPDATE: ErrorCode.UPDATE_FAILED,
            Operation.DELETE: ErrorCode.DELETE_FAILED,
        }[self]


def _describe(association_id: Optional[str]) -> str:
    return f"SSM association {association_id}" if association_id else "SSM association"


class AssociationError(Exception):
    """An error occurred while reconciling an SSM association"""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR


class AssociationOperationError(AssociationError):
    """A call to the SSM service failed"""

    def __init__(
        self,
        operation: Operation,
        association_id: Optional[str],
        cause: Exception,
    ) -> None:
        super().__init__(f"Error {operation.value} {_describe(association_id)}: {cause}")
        self.operation = operation
        self.association_id = association_id
        self.cause = cause
        self.error_code = operation.error_code


class MalformedResponseError(AssociationError):
    """The SSM service answered successfully without describing the association"""

    error_code = ErrorCode.MALFORMED_RESPONSE

    def __init__(
        self,
        operation: Operation,
        association_id: Optional[str],
        detail: str = "AssociationDescription was missing",
    ) -> None:
        super().__init__(
            f"Malformed response while {operation.value} {_describe(association_id)}: {detail}"
        )
        self.operation = operation
        self.association_id = association_id


class ReplacementRequiredError(AssociationError):
    """The requested change touches a field that cannot be updated in place"""

    error_code = ErrorCode.REPLACEMENT_REQUIRED

    def __init__(self, association_id: Optional[str], fields: Iterable[str]) -> None:
        self.fields = sorted(fields)
        super().__init__(
            f"Changing {', '.join(self.fields)} of {_describe(association_id)} requires replacement"
        )


class UnsupportedSchemaVersion(AssociationError):
    error_code = ErrorCode.UNSUPPORTED_SCHEMA_VERSION
