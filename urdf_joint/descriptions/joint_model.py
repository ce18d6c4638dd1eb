"""In-memory model of a URDF joint.

A Joint is produced by ``parse_joint`` and treated as immutable input data
afterwards. Optional sub-structures are ``None`` when the corresponding
child element is absent; ``None`` is never interchangeable with a zero value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np
from scipy.spatial.transform import Rotation as R

from urdf_joint.descriptions.errors import JointParseError, ParseErrorKind
from urdf_joint.utils.math_utils import Vector3

Quaternion = Tuple[float, float, float, float]


class JointType(Enum):
    """The six URDF joint kinds, valued by their exact XML spelling."""

    REVOLUTE = "revolute"
    CONTINUOUS = "continuous"
    PRISMATIC = "prismatic"
    FIXED = "fixed"
    FLOATING = "floating"
    PLANAR = "planar"

    @classmethod
    def from_string(cls, text: str) -> "JointType":
        """Resolve a ``type`` attribute. The match is exact and case-sensitive."""
        joint_type = _JOINT_TYPE_BY_SPELLING.get(text)
        if joint_type is None:
            raise JointParseError(
                ParseErrorKind.UNKNOWN_TYPE,
                "joint",
                "type",
                f"'{text}' is not one of {sorted(_JOINT_TYPE_BY_SPELLING)}",
            )
        return joint_type


_JOINT_TYPE_BY_SPELLING = {joint_type.value: joint_type for joint_type in JointType}

# Types whose axis is meaningful and therefore read from <axis>.
AXIS_TYPES = frozenset(
    {JointType.REVOLUTE, JointType.CONTINUOUS, JointType.PRISMATIC, JointType.PLANAR}
)
# Types that cannot be decoded without a <limit> child.
LIMITED_TYPES = frozenset({JointType.REVOLUTE, JointType.PRISMATIC})


@dataclass(frozen=True)
class Pose:
    """Transform from the parent link frame to the joint frame.

    ``rotation`` is a unit quaternion in scipy's (x, y, z, w) order.
    """

    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = (0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_xyz_rpy(cls, xyz: Vector3, rpy: Vector3) -> "Pose":
        quat = R.from_euler("xyz", rpy).as_quat()
        return cls(position=tuple(xyz), rotation=tuple(float(q) for q in quat))

    def rpy(self) -> np.ndarray:
        """Fixed-axis roll, pitch, yaw of the rotation."""
        return R.from_quat(self.rotation).as_euler("xyz")

    def as_matrix(self) -> np.ndarray:
        """Homogeneous 4x4 transform."""
        transform = np.eye(4)
        transform[:3, :3] = R.from_quat(self.rotation).as_matrix()
        transform[:3, 3] = self.position
        return transform


@dataclass(frozen=True)
class JointDynamics:
    damping: float = 0.0
    friction: float = 0.0


@dataclass(frozen=True)
class JointLimits:
    effort: float
    velocity: float
    lower: float = 0.0
    upper: float = 0.0


@dataclass(frozen=True)
class JointSafety:
    k_velocity: float
    soft_lower_limit: float = 0.0
    soft_upper_limit: float = 0.0
    k_position: float = 0.0


@dataclass(frozen=True)
class JointCalibration:
    """Reference positions of the calibration switch edges. Either may be unset."""

    rising: Optional[float] = None
    falling: Optional[float] = None


@dataclass(frozen=True)
class JointMimic:
    """This joint follows ``joint_name`` as ``multiplier * q + offset``.

    ``joint_name`` is only a name; whether that joint exists is checked by
    whoever assembles the robot model.
    """

    joint_name: str
    multiplier: float = 1.0
    offset: float = 0.0


@dataclass(frozen=True)
class Joint:
    """A kinematic connector between a parent and a child link."""

    name: str
    type: JointType
    origin: Pose = Pose()
    axis: Vector3 = (1.0, 0.0, 0.0)
    parent_link_name: str = ""
    child_link_name: str = ""
    dynamics: Optional[JointDynamics] = None
    limits: Optional[JointLimits] = None
    safety: Optional[JointSafety] = None
    calibration: Optional[JointCalibration] = None
    mimic: Optional[JointMimic] = None

    @property
    def is_movable(self) -> bool:
        return self.type is not JointType.FIXED

    @property
    def has_axis(self) -> bool:
        return self.type in AXIS_TYPES

    def axis_array(self) -> np.ndarray:
        return np.asarray(self.axis, dtype=float)

    def limit_range(self) -> Optional[Tuple[float, float]]:
        """Position range (lower, upper), or None when the joint is unbounded.

        Continuous joints ignore lower/upper even if a <limit> is present.
        """
        if self.limits is None or self.type is JointType.CONTINUOUS:
            return None
        return (self.limits.lower, self.limits.upper)
