# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any, Mapping, TypeGuard, cast


class ValidationException(Exception):
    pass


def require_str(untyped_dict: Mapping[str, Any], key: str) -> str:
    validate_string(untyped_dict, key, True)
    return cast(str, untyped_dict[key])


def validate_string(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a str. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is not str:
        raise ValidationException(f"{key} must be a string, found {type(value)}")
    return True


def validate_string_list(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a list[str]. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is not list:
        raise ValidationException(f"{key} must be a list, found {type(value)}")
    for item in value:
        if type(item) is not str:
            raise ValidationException(
                f"All elements of {key} must be strings, found {type(item)}"
            )
    return True


def validate_string_map(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a dict[str, str]. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if not isinstance(value, Mapping):
        raise ValidationException(f"{key} must be a map, found {type(value)}")
    for map_key, map_value in value.items():
        if type(map_key) is not str or type(map_value) is not str:
            raise ValidationException(
                f"All entries of {key} must map strings to strings, found {map_key!r}: {type(map_value)}"
            )
    return True


def validate_block_list(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a list of maps. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is not list:
        raise ValidationException(f"{key} must be a list, found {type(value)}")
    for item in value:
        if not isinstance(item, Mapping):
            raise ValidationException(
                f"All elements of {key} must be maps, found {type(item)}"
            )
    return True
