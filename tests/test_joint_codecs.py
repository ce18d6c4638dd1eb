"""Tests for the joint sub-structure codecs (dynamics, limit, safety, calibration, mimic)."""

import xml.etree.ElementTree as ET

import pytest

from urdf_joint.descriptions.errors import JointParseError, ParseErrorKind
from urdf_joint.descriptions.joint import (
    export_calibration,
    export_dynamics,
    export_limits,
    export_mimic,
    export_safety,
    parse_calibration,
    parse_dynamics,
    parse_limits,
    parse_mimic,
    parse_safety,
)
from urdf_joint.descriptions.joint_model import (
    JointCalibration,
    JointDynamics,
    JointLimits,
    JointMimic,
    JointSafety,
)
from urdf_joint.descriptions.xml_config import JointXMLConfig


def _floats(element: ET.Element) -> dict:
    return {key: float(value) for key, value in element.attrib.items()}


class TestDynamics:
    def test_both(self, xml):
        dynamics = parse_dynamics(xml('<dynamics damping="0.5" friction="0.1"/>'))
        assert dynamics == JointDynamics(damping=0.5, friction=0.1)

    def test_damping_only(self, xml):
        dynamics = parse_dynamics(xml('<dynamics damping="0.5"/>'))
        assert dynamics.damping == 0.5
        assert dynamics.friction == 0.0

    def test_friction_only(self, xml):
        assert parse_dynamics(xml('<dynamics friction="2"/>')) == JointDynamics(friction=2.0)

    def test_empty_is_invalid(self, xml):
        with pytest.raises(JointParseError) as exc_info:
            parse_dynamics(xml("<dynamics/>"))
        assert exc_info.value.kind is ParseErrorKind.EMPTY_DYNAMICS

    def test_malformed(self, xml):
        with pytest.raises(JointParseError) as exc_info:
            parse_dynamics(xml('<dynamics damping="x" friction="1"/>'))
        assert exc_info.value.kind is ParseErrorKind.MALFORMED_VALUE
        assert exc_info.value.attribute == "damping"

    def test_export_writes_both(self):
        parent = ET.Element("joint")
        element = export_dynamics(JointDynamics(damping=0.5), parent, JointXMLConfig())
        assert _floats(element) == {"damping": 0.5, "friction": 0.0}


class TestLimits:
    def test_full(self, xml):
        limits = parse_limits(xml('<limit lower="-1" upper="1" effort="10" velocity="2"/>'))
        assert limits == JointLimits(effort=10.0, velocity=2.0, lower=-1.0, upper=1.0)

    def test_bounds_default_to_zero(self, xml):
        limits = parse_limits(xml('<limit effort="10" velocity="2"/>'))
        assert (limits.lower, limits.upper) == (0.0, 0.0)

    @pytest.mark.parametrize(
        "attrs, missing",
        [('velocity="2"', "effort"), ('effort="10"', "velocity")],
    )
    def test_mandatory(self, xml, attrs, missing):
        with pytest.raises(JointParseError) as exc_info:
            parse_limits(xml(f'<limit lower="0" upper="1" {attrs}/>'))
        assert exc_info.value.kind is ParseErrorKind.MISSING_ATTRIBUTE
        assert exc_info.value.attribute == missing

    def test_malformed_optional(self, xml):
        with pytest.raises(JointParseError) as exc_info:
            parse_limits(xml('<limit lower="low" effort="10" velocity="2"/>'))
        assert exc_info.value.attribute == "lower"

    def test_export_writes_all(self):
        element = export_limits(
            JointLimits(effort=10.0, velocity=2.0), ET.Element("joint"), JointXMLConfig()
        )
        assert element.tag == "limit"
        assert _floats(element) == {"effort": 10.0, "velocity": 2.0, "lower": 0.0, "upper": 0.0}


class TestSafety:
    def test_defaults(self, xml):
        safety = parse_safety(xml('<safety_controller k_velocity="10"/>'))
        assert safety == JointSafety(k_velocity=10.0)

    def test_full(self, xml):
        safety = parse_safety(
            xml(
                '<safety_controller soft_lower_limit="-1" soft_upper_limit="1"'
                ' k_position="5" k_velocity="10"/>'
            )
        )
        assert safety == JointSafety(
            k_velocity=10.0, soft_lower_limit=-1.0, soft_upper_limit=1.0, k_position=5.0
        )

    def test_k_velocity_required(self, xml):
        with pytest.raises(JointParseError) as exc_info:
            parse_safety(xml('<safety_controller k_position="5"/>'))
        assert exc_info.value.attribute == "k_velocity"

    def test_export_writes_all(self):
        element = export_safety(
            JointSafety(k_velocity=3.0), ET.Element("joint"), JointXMLConfig()
        )
        assert element.tag == "safety_controller"
        assert _floats(element) == {
            "k_position": 0.0,
            "k_velocity": 3.0,
            "soft_lower_limit": 0.0,
            "soft_upper_limit": 0.0,
        }


class TestCalibration:
    def test_rising_only(self, xml):
        calibration = parse_calibration(xml('<calibration rising="0.3"/>'))
        assert calibration.rising == 0.3
        assert calibration.falling is None

    def test_zero_is_not_unset(self, xml):
        calibration = parse_calibration(xml('<calibration falling="0"/>'))
        assert calibration.falling == 0.0
        assert calibration.rising is None

    def test_empty_is_valid(self, xml):
        assert parse_calibration(xml("<calibration/>")) == JointCalibration()

    def test_malformed(self, xml):
        with pytest.raises(JointParseError):
            parse_calibration(xml('<calibration rising="?"/>'))

    def test_export_only_set_edges(self):
        parent = ET.Element("joint")
        element = export_calibration(JointCalibration(rising=0.3), parent, JointXMLConfig())
        assert element.attrib == {"rising": "0.3"}

    def test_export_nothing_when_unset(self):
        parent = ET.Element("joint")
        assert export_calibration(JointCalibration(), parent, JointXMLConfig()) is None
        assert parent.find("calibration") is None


class TestMimic:
    def test_defaults(self, xml):
        mimic = parse_mimic(xml('<mimic joint="leader"/>'))
        assert mimic == JointMimic(joint_name="leader", multiplier=1.0, offset=0.0)

    def test_full(self, xml):
        mimic = parse_mimic(xml('<mimic joint="leader" multiplier="-1" offset="0.2"/>'))
        assert mimic == JointMimic(joint_name="leader", multiplier=-1.0, offset=0.2)

    @pytest.mark.parametrize("text", ['<mimic multiplier="2"/>', '<mimic joint=""/>'])
    def test_joint_required(self, xml, text):
        with pytest.raises(JointParseError) as exc_info:
            parse_mimic(xml(text))
        assert exc_info.value.kind is ParseErrorKind.MISSING_ATTRIBUTE
        assert exc_info.value.attribute == "joint"

    def test_export(self):
        element = export_mimic(
            JointMimic(joint_name="leader"), ET.Element("joint"), JointXMLConfig()
        )
        assert element.attrib == {"offset": "0.0", "multiplier": "1.0", "joint": "leader"}

    def test_export_skips_empty_name(self):
        parent = ET.Element("joint")
        assert export_mimic(JointMimic(joint_name=""), parent, JointXMLConfig()) is None
        assert len(parent) == 0
