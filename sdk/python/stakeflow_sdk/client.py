"""
JSON-RPC client for fetching network stakes
"""

import itertools
from typing import Any, Dict, List, Optional

import requests

from .models import VoteAccounts
from .snapshot import StakeSnapshot


class RpcError(RuntimeError):
    """Raised when the node answers with a JSON-RPC error object"""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data


class StakeRpcClient:
    """
    Client for reading stake data from an RPC node.

    Example:
        >>> with StakeRpcClient("https://api.mainnet-beta.solana.com") as client:
        ...     snapshot = client.get_stake_snapshot()
        >>> print(f"Validators: {len(snapshot)}")
    """

    def __init__(self, rpc_url: str, timeout: int = 30):
        """
        Initialize the RPC client.

        Args:
            rpc_url: JSON-RPC endpoint URL
            timeout: Request timeout in seconds (default: 30)
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
        })
        self._ids = itertools.count(1)

    def _call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a JSON-RPC call and return its result"""
        response = self.session.post(
            self.rpc_url,
            json={
                'jsonrpc': '2.0',
                'id': next(self._ids),
                'method': method,
                'params': params or [],
            },
            timeout=self.timeout
        )
        response.raise_for_status()
        body: Dict[str, Any] = response.json()
        if 'error' in body:
            error = body['error']
            raise RpcError(error.get('code', 0), error.get('message', ''), error.get('data'))
        return body['result']

    def get_vote_accounts(self) -> VoteAccounts:
        """
        Get current and delinquent vote accounts.

        Returns:
            VoteAccounts object
        """
        return VoteAccounts.from_rpc(self._call('getVoteAccounts'))

    def get_stake_snapshot(self) -> StakeSnapshot:
        """
        Get the activated stake of every node with a vote account.

        Returns:
            StakeSnapshot keyed by node identity
        """
        return StakeSnapshot.from_vote_accounts(self.get_vote_accounts())

    def close(self):
        """Close the session"""
        self.session.close()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, *args):
        """Context manager exit"""
        self.close()
