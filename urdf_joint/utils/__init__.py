"""Utility modules for the urdf_joint package.

This package contains helper functions for:
- Locale-independent numeric and vector text conversion
- Float formatting for exported XML attributes
- Pretty-printing XML elements
"""
