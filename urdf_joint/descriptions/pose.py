"""Codec for the <origin> element of URDF joints.

URDF gives rotations as fixed-axis roll/pitch/yaw (``rpy``), which is
scipy's lowercase ``"xyz"`` Euler sequence. Newer descriptions may give a
``quat_xyzw`` quaternion instead; the two are mutually exclusive.
"""

import xml.etree.ElementTree as ET
from typing import Optional

import numpy as np
from scipy.spatial.transform import Rotation as R

from urdf_joint.descriptions.attributes import read_vector3
from urdf_joint.descriptions.errors import JointParseError, ParseErrorKind
from urdf_joint.descriptions.joint_model import Pose
from urdf_joint.descriptions.xml_config import JointXMLConfig
from urdf_joint.utils.math_utils import str_to_double, vector_to_string


def _read_quaternion(element: ET.Element) -> Optional[np.ndarray]:
    text = element.get("quat_xyzw")
    if text is None:
        return None

    pieces = text.split()
    try:
        if len(pieces) != 4:
            raise ValueError(
                f"Parser found {len(pieces)} elements in '{text}' but 4 expected."
            )
        quat = np.array([str_to_double(piece) for piece in pieces])
    except ValueError as e:
        raise JointParseError(
            ParseErrorKind.MALFORMED_VALUE, element.tag, "quat_xyzw", str(e)
        ) from e

    norm = np.linalg.norm(quat)
    if norm == 0.0:
        raise JointParseError(
            ParseErrorKind.MALFORMED_VALUE,
            element.tag,
            "quat_xyzw",
            "quaternion has zero norm",
        )
    return quat / norm


def parse_pose(element: ET.Element) -> Pose:
    """Decode an <origin> element.

    Args:
        element: The <origin> element.

    Returns:
        The pose; missing ``xyz``/``rpy`` default to zero.

    Raises:
        JointParseError: On malformed vectors or when both ``rpy`` and
            ``quat_xyzw`` are given.
    """
    xyz = read_vector3(element, "xyz")
    rpy = read_vector3(element, "rpy")
    quat = _read_quaternion(element)

    if rpy is not None and quat is not None:
        raise JointParseError(
            ParseErrorKind.CONFLICTING_ROTATION,
            element.tag,
            detail="both rpy and quat_xyzw are given",
        )

    position = xyz if xyz is not None else (0.0, 0.0, 0.0)
    if quat is not None:
        return Pose(position=position, rotation=tuple(float(q) for q in quat))

    return Pose.from_xyz_rpy(position, rpy if rpy is not None else (0.0, 0.0, 0.0))


def export_pose(
    pose: Pose, parent: ET.Element, config: Optional[JointXMLConfig] = None
) -> ET.Element:
    """Append an <origin> element for ``pose`` to ``parent``."""
    config = config or JointXMLConfig()
    return ET.SubElement(
        parent,
        "origin",
        {
            "xyz": vector_to_string(pose.position, config.digits),
            "rpy": vector_to_string(pose.rpy(), config.digits),
        },
    )
