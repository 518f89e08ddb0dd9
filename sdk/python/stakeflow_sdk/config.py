"""
Protocol constants for stake-weighted QUIC flow control
"""

import dataclasses
from dataclasses import dataclass

# Solana QUIC definitions
PACKET_DATA_SIZE = 1232
QUIC_MAX_UNSTAKED_CONCURRENT_STREAMS = 128
QUIC_MIN_STAKED_CONCURRENT_STREAMS = 128
QUIC_MAX_STAKED_CONCURRENT_STREAMS = 512
QUIC_TOTAL_STAKED_CONCURRENT_STREAMS = 100_000
QUIC_UNSTAKED_RECEIVE_WINDOW_RATIO = 128
QUIC_MIN_STAKED_RECEIVE_WINDOW_RATIO = 128
QUIC_MAX_STAKED_RECEIVE_WINDOW_RATIO = 512

# Largest value a QUIC variable-length integer can carry
VARINT_MAX = 2**62 - 1


@dataclass(frozen=True)
class FlowControlConfig:
    """
    Constants driving stream allocation and receive window sizing.

    Defaults match the Solana QUIC definitions. Pass a custom instance to
    evaluate the allocator against a synthetic budget.

    Example:
        >>> config = FlowControlConfig(max_staked_streams=1024)
        >>> StreamAllocator(config).compute_max_streams(Staked(10), 100)
    """
    min_staked_streams: int = QUIC_MIN_STAKED_CONCURRENT_STREAMS
    max_staked_streams: int = QUIC_MAX_STAKED_CONCURRENT_STREAMS
    total_staked_streams_budget: int = QUIC_TOTAL_STAKED_CONCURRENT_STREAMS
    max_unstaked_streams: int = QUIC_MAX_UNSTAKED_CONCURRENT_STREAMS
    min_staked_ratio: int = QUIC_MIN_STAKED_RECEIVE_WINDOW_RATIO
    max_staked_ratio: int = QUIC_MAX_STAKED_RECEIVE_WINDOW_RATIO
    unstaked_ratio: int = QUIC_UNSTAKED_RECEIVE_WINDOW_RATIO
    packet_size: int = PACKET_DATA_SIZE
    max_varint: int = VARINT_MAX

    def __post_init__(self):
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{f.name} must be a positive int, got {value!r}")

        if self.min_staked_streams > self.max_staked_streams:
            raise ValueError(
                f"min_staked_streams ({self.min_staked_streams}) exceeds "
                f"max_staked_streams ({self.max_staked_streams})"
            )
        if self.total_staked_streams_budget < self.min_staked_streams:
            raise ValueError(
                f"total_staked_streams_budget ({self.total_staked_streams_budget}) "
                f"is below min_staked_streams ({self.min_staked_streams})"
            )
        if self.min_staked_ratio > self.max_staked_ratio:
            raise ValueError(
                f"min_staked_ratio ({self.min_staked_ratio}) exceeds "
                f"max_staked_ratio ({self.max_staked_ratio})"
            )
        if self.max_varint > VARINT_MAX:
            raise ValueError(
                f"max_varint ({self.max_varint}) exceeds the QUIC varint limit ({VARINT_MAX})"
            )

    def replace(self, **changes) -> "FlowControlConfig":
        """Return a copy with the given fields changed"""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = FlowControlConfig()
