"""
Data models for StakeFlow SDK
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from .utils import Utils

U64_MAX = 2**64 - 1


def _check_u64(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} out of u64 range: {value}")


@dataclass(frozen=True)
class Unstaked:
    """Connection peer with no stake"""


@dataclass(frozen=True)
class Staked:
    """Connection peer backed by stake (lamports)"""
    stake: int

    def __post_init__(self):
        _check_u64("stake", self.stake)


ConnectionPeerType = Union[Unstaked, Staked]


def classify_peer(stake: int) -> ConnectionPeerType:
    """
    Classify a peer by its stake.

    Args:
        stake: Peer stake in lamports

    Returns:
        Unstaked() for zero stake, Staked(stake) otherwise
    """
    _check_u64("stake", stake)
    if stake == 0:
        return Unstaked()
    return Staked(stake)


@dataclass(frozen=True)
class StakeStats:
    """Network stake statistics over positive-stake entries"""
    total: int
    min: int
    max: int

    def is_empty(self) -> bool:
        return self.total == 0


@dataclass
class VoteAccount:
    """Vote account as reported by getVoteAccounts"""
    vote_pubkey: str
    node_pubkey: str
    activated_stake: int
    commission: int = 0
    epoch_vote_account: bool = False
    last_vote: int = 0
    root_slot: int = 0

    @classmethod
    def from_rpc(cls, data: Dict[str, Any]) -> "VoteAccount":
        return cls(
            vote_pubkey=data['votePubkey'],
            node_pubkey=data['nodePubkey'],
            activated_stake=int(data['activatedStake']),
            commission=int(data.get('commission', 0)),
            epoch_vote_account=bool(data.get('epochVoteAccount', False)),
            last_vote=int(data.get('lastVote', 0)),
            root_slot=int(data.get('rootSlot', 0)),
        )


@dataclass
class VoteAccounts:
    """Current and delinquent vote accounts"""
    current: List[VoteAccount] = field(default_factory=list)
    delinquent: List[VoteAccount] = field(default_factory=list)

    @classmethod
    def from_rpc(cls, data: Dict[str, Any]) -> "VoteAccounts":
        return cls(
            current=[VoteAccount.from_rpc(a) for a in data.get('current', [])],
            delinquent=[VoteAccount.from_rpc(a) for a in data.get('delinquent', [])],
        )

    def all(self) -> List[VoteAccount]:
        return self.current + self.delinquent


@dataclass(frozen=True)
class ConnectionLimits:
    """Flow-control parameters derived for one connection"""
    peer_type: ConnectionPeerType
    stats: StakeStats
    max_uni_streams: int
    receive_window: int
    packet_size: int

    @property
    def max_sized_transactions(self) -> int:
        """Number of max sized packets that fit in the receive window"""
        return Utils.max_sized_transactions(self.receive_window, self.packet_size)
