"""
Utility functions for string manipulations and case conversions.
"""
import re


def camel_to_snake_case(name: str) -> str:
    """
    Convert a camelCase or PascalCase string to snake_case.

    Args:
        name: The camelCase or PascalCase string to convert

    Returns:
        The string in snake_case
    """
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()


def snake_to_camel_case(name: str) -> str:
    """
    Convert a snake_case string to camelCase.

    Used as the pydantic alias generator so configuration and result JSON
    keep the camelCase keys written by the JMX poller.
    """
    components = name.split('_')
    return components[0] + ''.join(x.title() for x in components[1:])


def is_blank(value) -> bool:
    """True for None, empty and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())
