"""
Shared test fixtures for the urdf_joint test suite.

Provides small helpers for building <joint> elements from XML text and a
fully populated joint description used by the decode and round-trip tests.
"""

import xml.etree.ElementTree as ET

import pytest


FULL_JOINT_XML = """
<joint name="elbow" type="revolute">
  <origin xyz="0.1 -0.2 0.3" rpy="0.1 0.2 0.3"/>
  <axis xyz="0 0 1"/>
  <parent link="upper_arm"/>
  <child link="forearm"/>
  <limit lower="-1.57" upper="1.57" effort="12.5" velocity="3.0"/>
  <safety_controller soft_lower_limit="-1.5" soft_upper_limit="1.5" k_position="15" k_velocity="10"/>
  <calibration rising="0.25" falling="-0.25"/>
  <mimic joint="shoulder" multiplier="-2" offset="0.5"/>
  <dynamics damping="0.7" friction="0.05"/>
</joint>
"""


@pytest.fixture
def xml():
    """Parse XML text into an element."""

    def _parse(text: str) -> ET.Element:
        return ET.fromstring(text.strip())

    return _parse


@pytest.fixture
def full_joint_element(xml) -> ET.Element:
    return xml(FULL_JOINT_XML)


@pytest.fixture
def robot_element() -> ET.Element:
    return ET.Element("robot", {"name": "test_bot"})
