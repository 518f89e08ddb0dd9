"""Tests for value objects: keys, snapshots, config and varints"""

import pytest

from stakeflow_sdk import (
    ConnectionLimits,
    FlowControlConfig,
    InvalidPubkeyError,
    Pubkey,
    StakeSnapshot,
    StakeStats,
    Staked,
    Unstaked,
    Utils,
    VarInt,
    VarIntBoundsExceeded,
    VoteAccounts,
    classify_peer,
)

A = Pubkey(bytes([1]) * 32)
B = Pubkey(bytes([2]) * 32)


def test_pubkey_base58_round_trip():
    key = Pubkey.from_string("1" * 32)
    assert key.raw == bytes(32)
    assert str(key) == "1" * 32
    assert Pubkey.from_string(str(A)) == A


@pytest.mark.parametrize("text", ["not-base58!", "0OIl", "abc"])
def test_pubkey_rejects_bad_text(text):
    with pytest.raises(InvalidPubkeyError):
        Pubkey.from_string(text)


def test_pubkey_rejects_wrong_length():
    with pytest.raises(InvalidPubkeyError):
        Pubkey(b"\x01" * 31)


def test_pubkey_hashable():
    assert {A: 1, Pubkey(bytes([1]) * 32): 2} == {A: 2}


def test_new_unique_keys_differ():
    assert Pubkey.new_unique() != Pubkey.new_unique()


def test_snapshot_is_read_only():
    snapshot = StakeSnapshot({A: 100})
    with pytest.raises(TypeError):
        snapshot[B] = 5
    assert dict(snapshot) == {A: 100}
    assert len(snapshot) == 1


def test_snapshot_copies_input():
    source = {A: 100}
    snapshot = StakeSnapshot(source)
    source[B] = 200
    assert B not in snapshot


@pytest.mark.parametrize("stake", [-1, 2**64, 1.5, "100", True])
def test_snapshot_rejects_bad_stake(stake):
    with pytest.raises(ValueError):
        StakeSnapshot({A: stake})


def test_snapshot_from_vote_accounts():
    accounts = VoteAccounts.from_rpc({
        'current': [
            {'votePubkey': 'v1', 'nodePubkey': str(A), 'activatedStake': 100},
            {'votePubkey': 'v2', 'nodePubkey': 'bad-key', 'activatedStake': 999},
        ],
        'delinquent': [
            {'votePubkey': 'v3', 'nodePubkey': str(B), 'activatedStake': 7,
             'commission': 10, 'lastVote': 42},
        ],
    })
    snapshot = StakeSnapshot.from_vote_accounts(accounts)
    assert dict(snapshot) == {A: 100, B: 7}
    assert accounts.delinquent[0].commission == 10
    assert accounts.delinquent[0].last_vote == 42


def test_classify_peer():
    assert classify_peer(0) == Unstaked()
    assert classify_peer(5) == Staked(5)


def test_staked_rejects_negative_stake():
    with pytest.raises(ValueError):
        Staked(-1)


def test_connection_limits_transaction_count():
    limits = ConnectionLimits(
        peer_type=Staked(1),
        stats=StakeStats(total=1, min=1, max=1),
        max_uni_streams=128,
        receive_window=1232 * 512 + 100,
        packet_size=1232,
    )
    assert limits.max_sized_transactions == 512


def test_default_config_values():
    config = FlowControlConfig()
    assert config.packet_size == 1232
    assert config.max_varint == 2**62 - 1
    assert config.replace(max_staked_streams=1024).max_staked_streams == 1024


@pytest.mark.parametrize("changes", [
    {'min_staked_streams': 0},
    {'packet_size': -1},
    {'unstaked_ratio': 1.5},
    {'min_staked_streams': 600},
    {'total_staked_streams_budget': 10},
    {'min_staked_ratio': 1000},
    {'max_varint': 2**62},
])
def test_config_validation(changes):
    with pytest.raises(ValueError):
        FlowControlConfig(**changes)


def test_varint_bounds():
    assert VarInt.from_int(2**62 - 1) == 2**62 - 1
    with pytest.raises(VarIntBoundsExceeded):
        VarInt.from_int(2**62)
    with pytest.raises(VarIntBoundsExceeded):
        VarInt.from_int(-1)


@pytest.mark.parametrize("value, size", [(63, 1), (64, 2), (16383, 2), (16384, 4), (2**30, 8)])
def test_varint_encoded_size(value, size):
    assert VarInt.from_int(value).encoded_size == size


def test_utils_formatting():
    assert Utils.format_pubkey("1" * 32) == "11111111..."
    assert Utils.format_pubkey(A, length=64) == str(A)
    assert Utils.max_sized_transactions(1232 * 128, 1232) == 128
