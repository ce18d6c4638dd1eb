"""Attribute readers shared by the joint and pose codecs."""

import xml.etree.ElementTree as ET
from typing import Optional

from urdf_joint.descriptions.errors import JointParseError, ParseErrorKind
from urdf_joint.utils.math_utils import Vector3, str_to_double, str_to_vector3


def require_attribute(element: ET.Element, name: str) -> str:
    """Return the text of a mandatory attribute.

    Args:
        element: The element holding the attribute.
        name: The attribute name.

    Returns:
        The attribute text, which may be empty.

    Raises:
        JointParseError: If the attribute is absent.
    """
    text = element.get(name)
    if text is None:
        raise JointParseError(ParseErrorKind.MISSING_ATTRIBUTE, element.tag, name)
    return text


def read_number(element: ET.Element, name: str) -> Optional[float]:
    """Read a numeric attribute.

    Args:
        element: The element holding the attribute.
        name: The attribute name.

    Returns:
        None if the attribute is absent, otherwise its value.

    Raises:
        JointParseError: If the attribute is present but not a decimal number.
    """
    text = element.get(name)
    if text is None:
        return None
    try:
        return str_to_double(text)
    except ValueError as e:
        raise JointParseError(
            ParseErrorKind.MALFORMED_VALUE, element.tag, name, str(e)
        ) from e


def read_number_or(element: ET.Element, name: str, default: float) -> float:
    """Read an optional numeric attribute, falling back to ``default`` when absent."""
    value = read_number(element, name)
    return default if value is None else value


def require_number(element: ET.Element, name: str) -> float:
    """Read a mandatory numeric attribute.

    Raises:
        JointParseError: If the attribute is absent or malformed.
    """
    value = read_number(element, name)
    if value is None:
        raise JointParseError(ParseErrorKind.MISSING_ATTRIBUTE, element.tag, name)
    return value


def read_vector3(element: ET.Element, name: str) -> Optional[Vector3]:
    """Read a 3-vector attribute such as ``xyz``; None if absent."""
    text = element.get(name)
    if text is None:
        return None
    try:
        return str_to_vector3(text)
    except ValueError as e:
        raise JointParseError(
            ParseErrorKind.MALFORMED_VALUE, element.tag, name, str(e)
        ) from e
