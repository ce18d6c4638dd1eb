"""Errors raised while decoding joint descriptions."""

from enum import Enum
from typing import Optional


class ParseErrorKind(Enum):
    MISSING_ATTRIBUTE = "missing_attribute"
    MALFORMED_VALUE = "malformed_value"
    UNKNOWN_TYPE = "unknown_type"
    MISSING_LIMITS = "missing_limits"
    EMPTY_DYNAMICS = "empty_dynamics"
    CONFLICTING_ROTATION = "conflicting_rotation"
    DUPLICATE_JOINT = "duplicate_joint"
    MALFORMED_XML = "malformed_xml"


class JointParseError(ValueError):
    """A joint element (or one of its children) failed to decode.

    Attributes:
        kind: What went wrong.
        tag: Tag of the element being decoded when the failure happened.
        attribute: The offending attribute, if the failure is tied to one.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        tag: str,
        attribute: Optional[str] = None,
        detail: str = "",
    ):
        self.kind = kind
        self.tag = tag
        self.attribute = attribute
        self.detail = detail

        where = f"<{tag}>" if attribute is None else f"<{tag} {attribute}=...>"
        message = f"{kind.value} in {where}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
