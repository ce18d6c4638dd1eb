"""XML formatting utilities for robot description elements."""

import xml.etree.ElementTree as ET
from xml.dom.minidom import parseString


def pretty_xml_string(root: ET.Element, indent: str = "  ") -> str:
    """Formats an XML Element into a pretty-printed XML string.

    Args:
        root (ET.Element): The root element of the XML tree to be formatted.
        indent (str): The indentation used for each nesting level.

    Returns:
        str: The formatted XML, without the XML declaration and blank lines.
    """
    # Convert the Element or ElementTree to a string
    xml_str = ET.tostring(root, encoding="utf-8").decode("utf-8")

    # Parse and pretty-print the XML string
    dom = parseString(xml_str)
    pretty_xml = dom.documentElement.toprettyxml(indent=indent)

    # Remove blank lines
    return "\n".join([line for line in pretty_xml.splitlines() if line.strip()])
