# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging

from aws_lambda_powertools import Logger

from ssm_association.configuration.provider_environment import ProviderEnv


def should_log_requests(logger: Logger) -> bool:
    return logger.log_level <= logging.DEBUG


def powertools_logger(service: str = "ssm-association") -> Logger:
    silence_boto_logs()
    logger = Logger(
        use_rfc3339=True,
        log_uncaught_exceptions=True,
        service=service,
    )
    return logger


def apply_log_level(logger: Logger, env: ProviderEnv) -> None:
    """enable DEBUG logging when TRACE is set, otherwise leave the configured level alone"""
    if env.enable_debug_logging:
        logger.setLevel(logging.DEBUG)


def silence_boto_logs() -> None:
    logging.getLogger("boto3").setLevel(logging.WARN)
    logging.getLogger("botocore").setLevel(logging.WARN)
    logging.getLogger("s3transfer").setLevel(logging.WARN)
    logging.getLogger("urllib3").setLevel(logging.WARN)
