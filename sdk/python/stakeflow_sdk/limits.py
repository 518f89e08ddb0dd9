"""
End-to-end connection limit computation
"""

import logging
from typing import Mapping, Optional, Union

from .config import DEFAULT_CONFIG, FlowControlConfig
from .keys import Pubkey
from .models import ConnectionLimits, Staked
from .stakes import ReceiveWindowCalculator, StakeStatsAggregator, StreamAllocator
from .utils import Utils

logger = logging.getLogger(__name__)


class UnknownValidatorError(KeyError):
    """Raised when the validator has no entry in the stake snapshot"""


def compute_connection_limits(
    stakes: Mapping[Pubkey, int],
    validator: Union[Pubkey, str],
    overrides: Optional[Mapping[Pubkey, int]] = None,
    config: FlowControlConfig = DEFAULT_CONFIG,
) -> ConnectionLimits:
    """
    Compute the flow-control limits a validator's connection receives.

    Args:
        stakes: Stake snapshot
        validator: Validator identity (Pubkey or base58 string)
        overrides: Replacement stakes applied to the statistics (default: none)
        config: Protocol constants (default: Solana QUIC definitions)

    Returns:
        ConnectionLimits for the validator

    Raises:
        InvalidPubkeyError: if validator is not a valid base58 key
        UnknownValidatorError: if validator is missing from the snapshot
        VarIntBoundsExceeded: if the receive window does not fit a QUIC varint

    Example:
        >>> limits = compute_connection_limits(client.get_stake_snapshot(), identity)
        >>> print(f"max uni streams: {limits.max_uni_streams}")
    """
    if isinstance(validator, str):
        validator = Pubkey.from_string(validator)

    stats = StakeStatsAggregator.compute(stakes, overrides)
    logger.info(
        "Network stats: total stake %d, min stake %d, max stake %d",
        stats.total, stats.min, stats.max,
    )

    try:
        stake = stakes[validator]
    except KeyError:
        raise UnknownValidatorError(f"no stake entry for validator {validator}") from None

    peer_type = Staked(stake)
    logger.info("Validator %s stake: %d", Utils.format_pubkey(validator), stake)
    max_uni_streams = StreamAllocator(config).compute_max_streams(peer_type, stats.total)
    receive_window = ReceiveWindowCalculator(config).compute_receive_window(
        stats.max, stats.min, peer_type
    )
    return ConnectionLimits(
        peer_type=peer_type,
        stats=stats,
        max_uni_streams=max_uni_streams,
        receive_window=int(receive_window),
        packet_size=config.packet_size,
    )
