"""
Stake-weighted flow control

Derives per-connection QUIC limits from a stake snapshot:
- StakeStatsAggregator reduces the snapshot to (total, min, max)
- StreamAllocator maps stake share to concurrent uni streams
- ReceiveWindowCalculator maps stake position to a receive window

All three are stateless and safe to call concurrently over a shared snapshot.
Stale or inconsistent stake data is logged and clamped, never raised.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Mapping, Optional

from .config import DEFAULT_CONFIG, FlowControlConfig
from .keys import Pubkey
from .models import ConnectionPeerType, StakeStats, Staked, Unstaked
from .varint import VarInt

logger = logging.getLogger(__name__)


def round_half_away(value: float) -> int:
    """
    Round a float to the nearest int, ties away from zero.

    Works on the exact binary value of the float, so 2.5 -> 3 and
    0.49999999999999994 -> 0.

    Args:
        value: Float to round

    Returns:
        Rounded integer
    """
    exact = Decimal(value)
    with localcontext() as ctx:
        # Enough digits for the whole integer part of any finite float
        ctx.prec = max(ctx.prec, exact.adjusted() + 2)
        return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _check_peer_type(peer_type) -> None:
    if not isinstance(peer_type, (Unstaked, Staked)):
        raise TypeError(f"unknown peer type: {peer_type!r}")


class StakeStatsAggregator:
    """Reduces a stake snapshot to total/min/max over staked participants"""

    @staticmethod
    def compute(
        stakes: Mapping[Pubkey, int],
        overrides: Optional[Mapping[Pubkey, int]] = None,
    ) -> StakeStats:
        """
        Compute network stake statistics.

        An override replaces the snapshot value for its key; override-only
        keys are counted too. Zero stakes are ignored.

        Args:
            stakes: Stake snapshot
            overrides: Replacement stakes (default: none)

        Returns:
            StakeStats, (0, 0, 0) when nothing is staked

        Example:
            >>> StakeStatsAggregator.compute({a: 100, b: 200, c: 0})
            StakeStats(total=300, min=100, max=200)
        """
        overrides = overrides or {}
        values = [
            stake for key, stake in stakes.items() if key not in overrides
        ]
        values.extend(overrides.values())
        values = [stake for stake in values if stake > 0]

        if not values:
            return StakeStats(total=0, min=0, max=0)
        return StakeStats(total=sum(values), min=min(values), max=max(values))


class StreamAllocator:
    """
    Maps a peer's share of total stake to its concurrent uni stream limit.

    Staked peers get a linear share of the total streams budget, clamped to
    [min_staked_streams, max_staked_streams]. Unstaked peers get a fixed count.
    """

    def __init__(self, config: FlowControlConfig = DEFAULT_CONFIG):
        self.config = config

    def compute_max_streams(self, peer_type: ConnectionPeerType, total_stake: int) -> int:
        """
        Compute the allowed number of concurrent uni streams.

        Args:
            peer_type: Unstaked() or Staked(stake)
            total_stake: Total network stake

        Returns:
            Stream count
        """
        _check_peer_type(peer_type)
        config = self.config
        if isinstance(peer_type, Unstaked):
            return config.max_unstaked_streams

        peer_stake = peer_type.stake
        # No share can be computed; fall back to the floor
        if total_stake == 0 or peer_stake > total_stake:
            logger.warning(
                "Invalid stake values: peer_stake: %d, total_stake: %d",
                peer_stake, total_stake,
            )
            return config.min_staked_streams

        delta = float(config.total_staked_streams_budget - config.min_staked_streams)
        streams = int((float(peer_stake) / float(total_stake)) * delta) + config.min_staked_streams
        return max(config.min_staked_streams, min(streams, config.max_staked_streams))


class ReceiveWindowCalculator:
    """
    Maps a peer's stake to a per-connection receive window.

    The window is packet_size * ratio, where the ratio for staked peers is
    linear in stake between the observed min and max stake:

        r(s) = a * s + b
        r(min_stake) = min_staked_ratio
        r(max_stake) = max_staked_ratio
    """

    def __init__(self, config: FlowControlConfig = DEFAULT_CONFIG):
        self.config = config

    def compute_ratio(self, max_stake: int, min_stake: int, stake: int) -> int:
        """
        Compute the receive window ratio for a staked peer.

        Args:
            max_stake: Largest stake in the network
            min_stake: Smallest positive stake in the network
            stake: Peer stake

        Returns:
            Ratio in packets
        """
        max_ratio = self.config.max_staked_ratio
        min_ratio = self.config.min_staked_ratio

        if stake > max_stake:
            logger.warning(
                "Peer stake %d exceeds max stake %d, using max ratio", stake, max_stake
            )
            return max_ratio

        if max_stake > min_stake:
            a = float(max_ratio - min_ratio) / float(max_stake - min_stake)
            b = float(max_ratio) - float(max_stake) * a
            ratio = a * float(stake) + b
            # Stake below min_stake can land under zero
            return max(0, round_half_away(ratio))

        logger.warning(
            "Degenerate stake range (min %d, max %d), using max ratio", min_stake, max_stake
        )
        return max_ratio

    def compute_receive_window(
        self, max_stake: int, min_stake: int, peer_type: ConnectionPeerType
    ) -> VarInt:
        """
        Compute the receive window in bytes.

        Args:
            max_stake: Largest stake in the network
            min_stake: Smallest positive stake in the network
            peer_type: Unstaked() or Staked(stake)

        Returns:
            Window size as a VarInt

        Raises:
            VarIntBoundsExceeded: if the window does not fit a QUIC varint
            TypeError: if peer_type is neither Unstaked nor Staked
        """
        _check_peer_type(peer_type)
        if isinstance(peer_type, Unstaked):
            ratio = self.config.unstaked_ratio
        else:
            ratio = self.compute_ratio(max_stake, min_stake, peer_type.stake)
        return VarInt.from_int(self.config.packet_size * ratio, self.config.max_varint)
