"""urdf_joint: decoding and encoding of URDF joint descriptions.

This package provides tools for:
- Decoding <joint> elements into immutable joint models
- Validating the type-dependent joint grammar (axis, limits, safety,
  calibration, mimic and dynamics)
- Encoding joint models back into URDF XML
"""
