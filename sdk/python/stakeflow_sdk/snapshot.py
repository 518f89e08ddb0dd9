"""
Immutable point-in-time view of network stakes
"""

import logging
from types import MappingProxyType
from collections.abc import Mapping
from typing import Iterator, Optional

from .keys import InvalidPubkeyError, Pubkey
from .models import VoteAccounts, _check_u64

logger = logging.getLogger(__name__)


class StakeSnapshot(Mapping):
    """
    Read-only mapping of participant to stake (lamports).

    A snapshot never changes after construction, so one instance can be
    shared by any number of concurrent readers. Refreshing stakes means
    building a new snapshot.

    Example:
        >>> snapshot = StakeSnapshot({key_a: 100, key_b: 200})
        >>> snapshot[key_a]
        100
    """

    __slots__ = ('_stakes',)

    def __init__(self, stakes: Optional[Mapping[Pubkey, int]] = None):
        stakes = dict(stakes or {})
        for key, stake in stakes.items():
            _check_u64(f"stake of {key}", stake)
        self._stakes = MappingProxyType(stakes)

    @classmethod
    def from_vote_accounts(cls, vote_accounts: VoteAccounts) -> "StakeSnapshot":
        """
        Build a snapshot from current and delinquent vote accounts.

        Accounts whose node identity does not parse are skipped.

        Args:
            vote_accounts: VoteAccounts as returned by getVoteAccounts

        Returns:
            StakeSnapshot keyed by node identity
        """
        stakes = {}
        for account in vote_accounts.all():
            try:
                node = Pubkey.from_string(account.node_pubkey)
            except InvalidPubkeyError:
                logger.debug("Skipping vote account %s with bad node pubkey %r",
                             account.vote_pubkey, account.node_pubkey)
                continue
            stakes[node] = account.activated_stake
        return cls(stakes)

    def __getitem__(self, key: Pubkey) -> int:
        return self._stakes[key]

    def __iter__(self) -> Iterator[Pubkey]:
        return iter(self._stakes)

    def __len__(self) -> int:
        return len(self._stakes)

    def __repr__(self) -> str:
        return f"StakeSnapshot({len(self)} entries)"
