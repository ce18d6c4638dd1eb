"""URDF <joint> decoding and encoding.

Decoding is a single front-to-back pass over the element that stops at the
first invalid field and raises ``JointParseError``; callers never see a
partially built Joint. Which children are read, and which are required,
depends on the joint type:

- ``axis`` is only read for revolute, continuous, prismatic and planar joints.
- ``limit`` is mandatory for revolute and prismatic joints.
- ``safety_controller``, ``calibration``, ``mimic`` and ``dynamics`` are
  optional for every type.

Encoding is not an exact inverse in two places:

- The axis is written for every type, including fixed and floating joints
  whose axis the decoder never reads.
- A <calibration/> with neither edge decodes to an empty JointCalibration,
  but nothing is written for it, so it decodes back as ``None``.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Callable, Dict, Optional, TypeVar

from urdf_joint.descriptions.attributes import (
    read_number,
    read_number_or,
    read_vector3,
    require_attribute,
    require_number,
)
from urdf_joint.descriptions.errors import JointParseError, ParseErrorKind
from urdf_joint.descriptions.joint_model import (
    AXIS_TYPES,
    LIMITED_TYPES,
    Joint,
    JointCalibration,
    JointDynamics,
    JointLimits,
    JointMimic,
    JointSafety,
    JointType,
    Pose,
)
from urdf_joint.descriptions.pose import export_pose, parse_pose
from urdf_joint.descriptions.xml_config import JointXMLConfig
from urdf_joint.utils.io_utils import pretty_xml_string
from urdf_joint.utils.math_utils import value_to_string, vector_to_string

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_dynamics(element: ET.Element) -> JointDynamics:
    """Decode a <dynamics> element.

    Args:
        element: The <dynamics> element.

    Returns:
        JointDynamics: Damping and friction, each 0 when not given.

    Raises:
        JointParseError: If a value is malformed or neither attribute is given.
    """
    damping = read_number(element, "damping")
    friction = read_number(element, "friction")
    if damping is None and friction is None:
        raise JointParseError(
            ParseErrorKind.EMPTY_DYNAMICS,
            element.tag,
            detail="neither damping nor friction is given",
        )
    return JointDynamics(
        damping=0.0 if damping is None else damping,
        friction=0.0 if friction is None else friction,
    )


def parse_limits(element: ET.Element) -> JointLimits:
    """Decode a <limit> element.

    Args:
        element: The <limit> element.

    Returns:
        JointLimits: The limits; lower and upper default to 0.

    Raises:
        JointParseError: If effort or velocity is missing, or any value is malformed.
    """
    lower = read_number_or(element, "lower", 0.0)
    upper = read_number_or(element, "upper", 0.0)
    effort = require_number(element, "effort")
    velocity = require_number(element, "velocity")
    return JointLimits(effort=effort, velocity=velocity, lower=lower, upper=upper)


def parse_safety(element: ET.Element) -> JointSafety:
    """Decode a <safety_controller> element.

    Args:
        element: The <safety_controller> element.

    Returns:
        JointSafety: The soft limits and gains; all but k_velocity default to 0.

    Raises:
        JointParseError: If k_velocity is missing or any value is malformed.
    """
    soft_lower_limit = read_number_or(element, "soft_lower_limit", 0.0)
    soft_upper_limit = read_number_or(element, "soft_upper_limit", 0.0)
    # k_position is not exactly a position gain; see the URDF safety docs.
    k_position = read_number_or(element, "k_position", 0.0)
    k_velocity = require_number(element, "k_velocity")
    return JointSafety(
        k_velocity=k_velocity,
        soft_lower_limit=soft_lower_limit,
        soft_upper_limit=soft_upper_limit,
        k_position=k_position,
    )


def parse_calibration(element: ET.Element) -> JointCalibration:
    """Decode a <calibration> element; absent edges stay unset (None)."""
    return JointCalibration(
        rising=read_number(element, "rising"),
        falling=read_number(element, "falling"),
    )


def parse_mimic(element: ET.Element) -> JointMimic:
    """Decode a <mimic> element.

    Args:
        element: The <mimic> element.

    Returns:
        JointMimic: The followed joint name, multiplier (default 1) and offset (default 0).

    Raises:
        JointParseError: If the joint attribute is missing or empty, or a value is malformed.
    """
    joint_name = require_attribute(element, "joint")
    if not joint_name:
        raise JointParseError(
            ParseErrorKind.MISSING_ATTRIBUTE,
            element.tag,
            "joint",
            "mimicked joint name is empty",
        )
    return JointMimic(
        joint_name=joint_name,
        multiplier=read_number_or(element, "multiplier", 1.0),
        offset=read_number_or(element, "offset", 0.0),
    )


def _read_link_name(element: ET.Element, tag: str) -> str:
    link_elem = element.find(tag)
    if link_elem is None:
        return ""

    link_name = link_elem.get("link")
    if link_name is None:
        logger.debug("<%s> of joint has no link attribute, leaving it empty", tag)
        return ""

    return link_name


def _parse_joint(element: ET.Element, name: str) -> Joint:
    origin_elem = element.find("origin")
    origin = parse_pose(origin_elem) if origin_elem is not None else Pose()

    parent_link_name = _read_link_name(element, "parent")
    child_link_name = _read_link_name(element, "child")

    joint_type = JointType.from_string(require_attribute(element, "type"))
    logger.debug("Parsing joint '%s' of type %s", name, joint_type.value)

    axis = (1.0, 0.0, 0.0)
    axis_elem = element.find("axis")
    if joint_type in AXIS_TYPES:
        if axis_elem is not None:
            xyz = read_vector3(axis_elem, "xyz")
            if xyz is not None:
                axis = xyz
    elif axis_elem is not None:
        logger.debug("Ignoring <axis> of %s joint '%s'", joint_type.value, name)

    limit_elem = element.find("limit")
    if limit_elem is not None:
        limits = parse_limits(limit_elem)
    elif joint_type in LIMITED_TYPES:
        raise JointParseError(
            ParseErrorKind.MISSING_LIMITS,
            element.tag,
            detail=f"{joint_type.value} joint '{name}' requires a <limit> element",
        )
    else:
        limits = None

    def parse_optional(tag: str, parse_fn: Callable[[ET.Element], T]) -> Optional[T]:
        child = element.find(tag)
        return parse_fn(child) if child is not None else None

    return Joint(
        name=name,
        type=joint_type,
        origin=origin,
        axis=axis,
        parent_link_name=parent_link_name,
        child_link_name=child_link_name,
        limits=limits,
        safety=parse_optional("safety_controller", parse_safety),
        calibration=parse_optional("calibration", parse_calibration),
        mimic=parse_optional("mimic", parse_mimic),
        dynamics=parse_optional("dynamics", parse_dynamics),
    )


def parse_joint(element: ET.Element) -> Joint:
    """Decode a <joint> element.

    Args:
        element: The <joint> element.

    Returns:
        Joint: A fully validated joint.

    Raises:
        JointParseError: On the first missing mandatory attribute, malformed
            number or vector, unknown type, or missing required <limit>.
    """
    name = require_attribute(element, "name")
    if not name:
        raise JointParseError(
            ParseErrorKind.MISSING_ATTRIBUTE, element.tag, "name", "joint name is empty"
        )

    try:
        return _parse_joint(element, name)
    except JointParseError as e:
        logger.debug("Joint '%s' is invalid: %s", name, e)
        raise


def try_parse_joint(element: ET.Element) -> Optional[Joint]:
    """Like ``parse_joint`` but returns None for an invalid element."""
    try:
        return parse_joint(element)
    except JointParseError as e:
        logger.warning("Rejected joint element: %s", e)
        return None


def parse_joints(robot: ET.Element) -> Dict[str, Joint]:
    """Decode every direct <joint> child of ``robot`` keyed by name.

    Raises:
        JointParseError: If any joint is invalid or two joints share a name.
    """
    joints: Dict[str, Joint] = {}
    for joint_elem in robot.findall("joint"):
        try:
            joint = parse_joint(joint_elem)
        except JointParseError as e:
            logger.warning("Rejected joint '%s': %s", joint_elem.get("name"), e)
            raise

        if joint.name in joints:
            logger.warning("Joint '%s' is not unique", joint.name)
            raise JointParseError(
                ParseErrorKind.DUPLICATE_JOINT,
                joint_elem.tag,
                "name",
                f"joint '{joint.name}' is not unique",
            )
        joints[joint.name] = joint

    return joints


def joint_from_string(xml_text: str) -> Joint:
    """Decode a joint from XML text whose root element is the <joint>."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise JointParseError(ParseErrorKind.MALFORMED_XML, "joint", detail=str(e)) from e
    return parse_joint(root)


def export_dynamics(
    dynamics: JointDynamics, parent: ET.Element, config: JointXMLConfig
) -> ET.Element:
    """Appends a <dynamics> element with both damping and friction.

    Args:
        dynamics: The dynamics to write.
        parent: The <joint> element to append to.
        config: Export settings.

    Returns:
        Created dynamics element
    """
    return ET.SubElement(
        parent,
        "dynamics",
        {
            "damping": value_to_string(dynamics.damping, config.digits),
            "friction": value_to_string(dynamics.friction, config.digits),
        },
    )


def export_limits(
    limits: JointLimits, parent: ET.Element, config: JointXMLConfig
) -> ET.Element:
    """Appends a <limit> element with all four attributes.

    Args:
        limits: The limits to write.
        parent: The <joint> element to append to.
        config: Export settings.

    Returns:
        Created limit element
    """
    return ET.SubElement(
        parent,
        "limit",
        {
            "effort": value_to_string(limits.effort, config.digits),
            "velocity": value_to_string(limits.velocity, config.digits),
            "lower": value_to_string(limits.lower, config.digits),
            "upper": value_to_string(limits.upper, config.digits),
        },
    )


def export_safety(
    safety: JointSafety, parent: ET.Element, config: JointXMLConfig
) -> ET.Element:
    """Appends a <safety_controller> element with all four attributes."""
    return ET.SubElement(
        parent,
        "safety_controller",
        {
            "k_position": value_to_string(safety.k_position, config.digits),
            "k_velocity": value_to_string(safety.k_velocity, config.digits),
            "soft_lower_limit": value_to_string(safety.soft_lower_limit, config.digits),
            "soft_upper_limit": value_to_string(safety.soft_upper_limit, config.digits),
        },
    )


def export_calibration(
    calibration: JointCalibration, parent: ET.Element, config: JointXMLConfig
) -> Optional[ET.Element]:
    """Append <calibration> only when at least one edge is set."""
    attrib = {}
    if calibration.falling is not None:
        attrib["falling"] = value_to_string(calibration.falling, config.digits)
    if calibration.rising is not None:
        attrib["rising"] = value_to_string(calibration.rising, config.digits)

    if not attrib:
        return None
    return ET.SubElement(parent, "calibration", attrib)


def export_mimic(
    mimic: JointMimic, parent: ET.Element, config: JointXMLConfig
) -> Optional[ET.Element]:
    """Appends a <mimic> element unless the followed joint name is empty.

    Args:
        mimic: The mimic relation to write.
        parent: The <joint> element to append to.
        config: Export settings.

    Returns:
        Created mimic element, or None when nothing was written
    """
    if not mimic.joint_name:
        return None
    return ET.SubElement(
        parent,
        "mimic",
        {
            "offset": value_to_string(mimic.offset, config.digits),
            "multiplier": value_to_string(mimic.multiplier, config.digits),
            "joint": mimic.joint_name,
        },
    )


def export_joint(
    joint: Joint, parent: ET.Element, config: Optional[JointXMLConfig] = None
) -> ET.Element:
    """Creates a <joint> element for ``joint`` under ``parent``.

    Args:
        joint: A joint previously produced by ``parse_joint`` or built by hand.
        parent: Element the new <joint> is appended to, usually <robot>.
        config: Export settings; defaults to ``JointXMLConfig()``.

    Returns:
        Created joint element
    """
    config = config or JointXMLConfig()

    jnt_element = ET.SubElement(
        parent, "joint", {"name": joint.name, "type": joint.type.value}
    )
    export_pose(joint.origin, jnt_element, config)
    # Written for every type, although only some types read it back.
    ET.SubElement(jnt_element, "axis", {"xyz": vector_to_string(joint.axis, config.digits)})
    ET.SubElement(jnt_element, "parent", {"link": joint.parent_link_name})
    ET.SubElement(jnt_element, "child", {"link": joint.child_link_name})

    if joint.dynamics is not None:
        export_dynamics(joint.dynamics, jnt_element, config)
    if joint.limits is not None:
        export_limits(joint.limits, jnt_element, config)
    if joint.safety is not None:
        export_safety(joint.safety, jnt_element, config)
    if joint.calibration is not None:
        export_calibration(joint.calibration, jnt_element, config)
    if joint.mimic is not None:
        export_mimic(joint.mimic, jnt_element, config)

    return jnt_element


def joint_to_string(joint: Joint, config: Optional[JointXMLConfig] = None) -> str:
    """Pretty-printed XML of a single encoded joint."""
    config = config or JointXMLConfig()
    holder = ET.Element("robot")
    jnt_element = export_joint(joint, holder, config)
    return pretty_xml_string(jnt_element, config.indent)
