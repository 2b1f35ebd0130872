# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from os import environ

from ssm_association.util.app_env_utils import AppEnvError, env_to_bool, env_to_int

DEFAULT_USER_AGENT_EXTRA = "ssm-association"
DEFAULT_MAX_RETRY_ATTEMPTS = 5


@dataclass(frozen=True)
class ProviderEnv:
    region: str
    user_agent_extra: str
    enable_debug_logging: bool
    max_retry_attempts: int

    @classmethod
    def from_env(cls) -> "ProviderEnv":
        region = environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION")
        if not region:
            raise AppEnvError(
                "Missing required application environment variable: AWS_REGION"
            )
        max_retry_attempts = env_to_int(
            "MAX_RETRY_ATTEMPTS",
            environ.get("MAX_RETRY_ATTEMPTS", str(DEFAULT_MAX_RETRY_ATTEMPTS)),
        )
        if max_retry_attempts < 1:
            raise AppEnvError(
                f"MAX_RETRY_ATTEMPTS must be at least 1, found {max_retry_attempts}"
            )
        return ProviderEnv(
            region=region,
            user_agent_extra=environ.get("USER_AGENT_EXTRA", DEFAULT_USER_AGENT_EXTRA),
            enable_debug_logging=env_to_bool(environ.get("TRACE", "False")),
            max_retry_attempts=max_retry_attempts,
        )
