"""
StakeFlow Python SDK

Stake-weighted QUIC flow control for validator connections.

Features:
- Stake statistics over a shared, immutable stake snapshot
- Concurrent uni stream allocation by stake share
- Receive window sizing by stake position
- Vote account fetch over JSON-RPC
"""

__version__ = "1.0.0"
__author__ = "StakeFlow Team"

from .client import RpcError, StakeRpcClient
from .config import DEFAULT_CONFIG, FlowControlConfig
from .keys import InvalidPubkeyError, Pubkey
from .limits import UnknownValidatorError, compute_connection_limits
from .models import (
    ConnectionLimits,
    ConnectionPeerType,
    Staked,
    StakeStats,
    Unstaked,
    VoteAccount,
    VoteAccounts,
    classify_peer,
)
from .snapshot import StakeSnapshot
from .stakes import ReceiveWindowCalculator, StakeStatsAggregator, StreamAllocator
from .utils import Utils, setup_logger
from .varint import VarInt, VarIntBoundsExceeded

__all__ = [
    "StakeRpcClient",
    "RpcError",
    "FlowControlConfig",
    "DEFAULT_CONFIG",
    "Pubkey",
    "InvalidPubkeyError",
    "compute_connection_limits",
    "UnknownValidatorError",
    "ConnectionLimits",
    "ConnectionPeerType",
    "Staked",
    "StakeStats",
    "Unstaked",
    "VoteAccount",
    "VoteAccounts",
    "classify_peer",
    "StakeSnapshot",
    "StakeStatsAggregator",
    "StreamAllocator",
    "ReceiveWindowCalculator",
    "Utils",
    "setup_logger",
    "VarInt",
    "VarIntBoundsExceeded",
]
