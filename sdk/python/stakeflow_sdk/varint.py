"""
QUIC variable-length integer bounds
"""

from .config import VARINT_MAX


class VarIntBoundsExceeded(ValueError):
    """Raised when a value cannot be encoded as a QUIC variable-length integer"""

    def __init__(self, value: int, maximum: int = VARINT_MAX):
        super().__init__(f"{value} is outside the varint range [0, {maximum}]")
        self.value = value
        self.maximum = maximum


class VarInt(int):
    """Integer known to fit a QUIC variable-length encoding"""

    @classmethod
    def from_int(cls, value: int, maximum: int = VARINT_MAX) -> "VarInt":
        """
        Range-check a value.

        Args:
            value: Integer to encode
            maximum: Largest encodable value (default: 2^62 - 1)

        Returns:
            VarInt holding the same value

        Raises:
            VarIntBoundsExceeded: if value is negative or above maximum
        """
        if value < 0 or value > maximum:
            raise VarIntBoundsExceeded(value, maximum)
        return cls(value)

    @property
    def encoded_size(self) -> int:
        """Bytes used on the wire (1, 2, 4 or 8)"""
        if self < 2**6:
            return 1
        if self < 2**14:
            return 2
        if self < 2**30:
            return 4
        return 8
