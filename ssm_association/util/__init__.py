# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import TYPE_CHECKING

from botocore.config import Config as _Config

if TYPE_CHECKING:
    from ssm_association.configuration.provider_environment import ProviderEnv


def get_boto_config(env: "ProviderEnv") -> _Config:
    """Returns a boto3 config with standard retries and `user_agent_extra`"""
    return _Config(
        retries={"max_attempts": env.max_retry_attempts, "mode": "standard"},
        user_agent_extra=env.user_agent_extra,
    )
