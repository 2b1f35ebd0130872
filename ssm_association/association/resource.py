# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import replace
from typing import TYPE_CHECKING, Final, NoReturn, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ssm_association.association.errors import (
    AssociationError,
    AssociationOperationError,
    MalformedResponseError,
    Operation,
    ReplacementRequiredError,
)
from ssm_association.association.request_builder import (
    build_create_association_request,
    build_update_association_request,
)
from ssm_association.association.schema import (
    UPDATE_TRACKED_FIELDS,
    changed_fields,
    replacement_fields,
)
from ssm_association.association.shape import association_from_description
from ssm_association.configuration.provider_environment import ProviderEnv
from ssm_association.model import InvalidAssociationDefinition, ManagedAssociation
from ssm_association.observability.powertools_logging import (
    apply_log_level,
    powertools_logger,
    should_log_requests,
)

if TYPE_CHECKING:
    from mypy_boto3_ssm import SSMClient
else:
    SSMClient = object

logger = powertools_logger()

ASSOCIATION_DOES_NOT_EXIST: Final = "AssociationDoesNotExist"


def _raise_operation_error(
    operation: Operation, association_id: Optional[str], error: Exception
) -> NoReturn:
    logger.error(
        f"Error {operation.value} SSM association {association_id or ''}: {error}",
        exc_info=True,
    )
    raise AssociationOperationError(operation, association_id, error) from error


class SSMAssociationResource:
    """
    Lifecycle operations for an SSM association.

    Every operation issues blocking calls through the client it was constructed with
    and returns the record to persist. No state is kept between calls and nothing is
    retried here, retries are configured on the client.
    """

    def __init__(
        self, ssm_client: SSMClient, env: Optional[ProviderEnv] = None
    ) -> None:
        self._ssm = ssm_client
        if env is not None:
            apply_log_level(logger, env)

    def create(self, desired: ManagedAssociation) -> Optional[ManagedAssociation]:
        """
        create the association and return it as observed by the service

        the returned record is identified by the association id assigned by the service
        """
        logger.debug(f"SSM association create: {desired.name}")

        request = build_create_association_request(desired)
        if should_log_requests(logger):
            logger.debug(f"create_association request: {request}")

        try:
            response = self._ssm.create_association(**request)
        except (ClientError, BotoCoreError) as e:
            _raise_operation_error(Operation.CREATE, None, e)

        description = response.get("AssociationDescription")
        if description is None or not description.get("AssociationId"):
            raise MalformedResponseError(Operation.CREATE, None)

        association_id = description["AssociationId"]
        logger.info(
            f"created SSM association {association_id} for document {desired.name}"
        )

        return self.read(association_id)

    def read(self, association_id: str) -> Optional[ManagedAssociation]:
        """
        describe the association and return the service's view of it

        returns None when the association no longer exists, the caller is expected to drop
        the record from managed state
        """
        logger.debug(f"Reading SSM association: {association_id}")

        try:
            response = self._ssm.describe_association(AssociationId=association_id)
        except ClientError as ce:
            if ce.response["Error"]["Code"] == ASSOCIATION_DOES_NOT_EXIST:
                logger.warning(
                    f"SSM association {association_id} not found, removing from state"
                )
                return None
            _raise_operation_error(Operation.READ, association_id, ce)
        except BotoCoreError as e:
            _raise_operation_error(Operation.READ, association_id, e)

        description = response.get("AssociationDescription")
        if description is None:
            raise MalformedResponseError(Operation.READ, association_id)

        try:
            observed = association_from_description(description)
        except InvalidAssociationDefinition as e:
            raise MalformedResponseError(Operation.READ, association_id, str(e)) from e

        if observed.association_id is None:
            observed = replace(observed, association_id=association_id)
        return observed

    def update(
        self, prior: ManagedAssociation, desired: ManagedAssociation
    ) -> Optional[ManagedAssociation]:
        """
        apply the desired configuration to an existing association in place

        raises ReplacementRequiredError if the change touches a force-new field, such changes
        must be applied by delete followed by create
        """
        association_id = prior.association_id
        if not association_id:
            raise AssociationError(
                f"Cannot update SSM association for document {prior.name}: no association_id"
            )

        logger.debug(f"SSM association update: {association_id}")

        force_new = replacement_fields(prior, desired)
        if force_new:
            raise ReplacementRequiredError(association_id, force_new)

        changes = changed_fields(prior, desired) & UPDATE_TRACKED_FIELDS
        if not changes:
            logger.warning(
                f"update of SSM association {association_id} has no changes, sending identifier only"
            )

        request = build_update_association_request(
            association_id, desired, has_changes=bool(changes)
        )
        if should_log_requests(logger):
            logger.debug(f"update_association request: {request}")

        try:
            self._ssm.update_association(**request)
        except (ClientError, BotoCoreError) as e:
            _raise_operation_error(Operation.UPDATE, association_id, e)

        logger.info(
            f"updated SSM association {association_id}: {', '.join(sorted(changes)) or 'no changes'}"
        )

        return self.read(association_id)

    def delete(self, association_id: str) -> None:
        """
        delete the association

        removing the record from persisted state is left to the caller
        """
        logger.debug(f"Deleting SSM association: {association_id}")

        try:
            self._ssm.delete_association(AssociationId=association_id)
        except (ClientError, BotoCoreError) as e:
            _raise_operation_error(Operation.DELETE, association_id, e)

        logger.info(f"deleted SSM association {association_id}")
