"""
Decoder limits and dictionary-key policy.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Nesting bound; stays far below Python's default recursion limit
DEFAULT_MAX_DEPTH = 64
MAX_DEPTH_CEILING = 256

# 64 decimal digits is well beyond any 64-bit value
DEFAULT_MAX_INT_DIGITS = 64

# 20 digits covers every length a 64-bit size can express
MAX_LENGTH_DIGITS = 20


class DecoderConfig(BaseModel):
    """Limits applied to untrusted input while decoding."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=MAX_DEPTH_CEILING,
        description="Maximum nesting of lists and dictionaries",
    )
    max_input_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum bytes a single decoded item may span (None for unbounded)",
    )
    max_int_digits: int = Field(
        default=DEFAULT_MAX_INT_DIGITS,
        ge=1,
        le=4096,
        description="Maximum digits in an integer; longer values are rejected as overflow",
    )
    max_length_digits: int = Field(
        default=MAX_LENGTH_DIGITS,
        ge=1,
        le=MAX_LENGTH_DIGITS,
        description="Maximum digits in a byte string length prefix",
    )
    strict_key_order: bool = Field(
        default=True,
        description="Reject dictionaries whose keys are not in ascending byte order",
    )


DEFAULT_CONFIG = DecoderConfig()
