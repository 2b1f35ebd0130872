# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import TYPE_CHECKING, Any, Optional

from boto3 import Session

from ssm_association.util import get_boto_config

if TYPE_CHECKING:
    from ssm_association.configuration.provider_environment import ProviderEnv


def get_client_with_standard_retry(
    service_name: str, env: "ProviderEnv", session: Optional[Session] = None
) -> Any:
    aws_session = session if session is not None else Session()

    result = aws_session.client(
        service_name=service_name, region_name=env.region, config=get_boto_config(env)
    )

    return result
