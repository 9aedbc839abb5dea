"""
Naming utilities for generated identifiers.

Converts event and type names (PascalCase, as found in JFR metadata)
into the constant-style names used by the generated sources.
"""

import re
from enum import Enum
from typing import Optional


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # thread_sleep
    CAMEL_CASE = "camel"  # threadSleep
    PASCAL_CASE = "pascal"  # ThreadSleep
    SCREAMING_SNAKE = "screaming_snake"  # THREAD_SLEEP


def to_screaming_snake_case(value: Optional[str]) -> Optional[str]:
    """
    Convert a Pascal/camel case identifier to SCREAMING_SNAKE_CASE.

    Boundaries are found by looking at each (previous, current, next)
    character triple, so the first and last characters are only
    uppercased. ``None`` is returned unchanged.

    Examples:
        ThreadSleep -> THREAD_SLEEP
        CPULoad     -> CPU_LOAD
        abc123      -> ABC_123

    Args:
        value: Identifier to convert

    Returns:
        Converted identifier
    """
    if value is None:
        return None

    result = []
    last = len(value) - 1

    for i, char in enumerate(value):
        upper = char.upper()

        if i == 0 or i == last:
            result.append(upper)
            continue

        previous = value[i - 1]
        following = value[i + 1]

        if (char.islower() and following.isupper()) or _letter_digit_boundary(
            char, following
        ):
            result.append(upper)
            result.append("_")
        elif previous.isupper() and char.isupper() and following.islower():
            # last capital of an acronym starts the next word
            result.append("_")
            result.append(upper)
        else:
            result.append(upper)

    return "".join(result)


def _letter_digit_boundary(char: str, following: str) -> bool:
    if not char.isalpha():
        return following.isalpha()
    return following.isdigit()


def to_snake_case(value: str) -> str:
    """Convert to snake_case."""
    value = value.replace("-", "_")
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    value = re.sub(r"_+", "_", value.lower())
    return value.strip("_")


def to_camel_case(value: str) -> str:
    """Convert to camelCase."""
    parts = to_snake_case(value).split("_")
    if not parts:
        return value
    return parts[0].lower() + "".join(part.capitalize() for part in parts[1:])


def to_pascal_case(value: str) -> str:
    """Convert to PascalCase."""
    return "".join(part.capitalize() for part in to_snake_case(value).split("_") if part)


def convert_case(value: Optional[str], target_case: NamingCase) -> Optional[str]:
    """
    Convert a name to the target case style.

    Args:
        value: Original name
        target_case: Desired case style

    Returns:
        Converted name (``None`` stays ``None``)
    """
    if value is None:
        return None
    if target_case == NamingCase.SCREAMING_SNAKE:
        return to_screaming_snake_case(value)
    elif target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(value)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(value)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(value)
    else:
        return value


JAVA_RESERVED = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch",
        "char", "class", "const", "continue", "default", "do", "double",
        "else", "enum", "extends", "final", "finally", "float", "for", "goto",
        "if", "implements", "import", "instanceof", "int", "interface", "long",
        "native", "new", "package", "private", "protected", "public", "return",
        "short", "static", "strictfp", "super", "switch", "synchronized",
        "this", "throw", "throws", "transient", "try", "void", "volatile",
        "while", "true", "false", "null", "var", "record", "yield",
    }
)


def sanitize_identifier(name: str, suffix: str = "_") -> str:
    """Append ``suffix`` to names that clash with Java keywords."""
    if name in JAVA_RESERVED:
        return f"{name}{suffix}"
    return name
