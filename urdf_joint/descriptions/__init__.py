"""Robot description models and URDF joint codecs.

This package provides functionality for:

- The joint model and its optional sub-structures
- Decoding and validating <joint> elements and their <origin> poses
- Writing joint models back into a URDF element tree
- Export configuration shared through gin
"""
