# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator
from os import environ
from typing import TYPE_CHECKING
from unittest.mock import patch

import boto3
from botocore.stub import Stubber
from moto import mock_aws
from pytest import fixture

from ssm_association.association.resource import SSMAssociationResource
from tests import DEFAULT_REGION

if TYPE_CHECKING:
    from mypy_boto3_ssm import SSMClient
else:
    SSMClient = object


@fixture(autouse=True)
def aws_credentials() -> Iterator[None]:
    creds = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "AWS_DEFAULT_REGION": DEFAULT_REGION,
    }
    with patch.dict(environ, creds, clear=True):
        yield


@fixture
def moto_backend() -> Iterator[None]:
    with mock_aws():
        yield


@fixture
def ssm_client() -> SSMClient:
    client: SSMClient = boto3.client("ssm", region_name=DEFAULT_REGION)
    return client


@fixture
def ssm_stub(ssm_client: SSMClient) -> Iterator[Stubber]:
    with Stubber(ssm_client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()


@fixture
def resource(ssm_client: SSMClient, ssm_stub: Stubber) -> SSMAssociationResource:
    return SSMAssociationResource(ssm_client)
