"""Configuration for writing joint descriptions back to XML."""

from dataclasses import dataclass
from typing import Optional

import gin


@gin.configurable
@dataclass
class JointXMLConfig:
    """Configuration class for joint XML export."""

    # Significant digits for exported floats. None keeps full repr precision,
    # which makes decode(encode(joint)) lossless.
    digits: Optional[int] = None
    indent: str = "  "
