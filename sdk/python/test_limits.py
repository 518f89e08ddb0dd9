"""End-to-end tests for connection limit computation"""

import logging

import pytest

from stakeflow_sdk import (
    FlowControlConfig,
    InvalidPubkeyError,
    Pubkey,
    StakeSnapshot,
    StakeStats,
    Staked,
    UnknownValidatorError,
    VarIntBoundsExceeded,
    compute_connection_limits,
)

A = Pubkey(bytes([1]) * 32)
B = Pubkey(bytes([2]) * 32)
C = Pubkey(bytes([3]) * 32)


@pytest.fixture
def snapshot():
    return StakeSnapshot({A: 100, B: 200, C: 0})


def test_limits_for_top_validator(snapshot):
    limits = compute_connection_limits(snapshot, B)

    assert limits.peer_type == Staked(200)
    assert limits.stats == StakeStats(total=300, min=100, max=200)
    assert limits.max_uni_streams == 512
    assert limits.receive_window == 1232 * 512
    assert limits.max_sized_transactions == 512


def test_limits_accept_base58_identity(snapshot):
    assert compute_connection_limits(snapshot, str(A)).receive_window == 1232 * 128


def test_zero_stake_validator_stays_staked(snapshot):
    limits = compute_connection_limits(snapshot, C)
    assert limits.peer_type == Staked(0)
    assert limits.max_uni_streams == 128
    assert limits.receive_window == 0


def test_overrides_shift_statistics(snapshot):
    limits = compute_connection_limits(snapshot, A, overrides={B: 100})
    assert limits.stats == StakeStats(total=200, min=100, max=100)
    assert limits.receive_window == 1232 * 512


def test_synthetic_budget():
    config = FlowControlConfig(
        min_staked_streams=10,
        max_staked_streams=300,
        total_staked_streams_budget=1010,
        packet_size=1000,
        min_staked_ratio=1,
        max_staked_ratio=3,
    )
    limits = compute_connection_limits({A: 250, B: 750}, A, config=config)
    assert limits.max_uni_streams == 260
    assert limits.receive_window == 1000
    assert limits.packet_size == 1000


def test_unknown_validator(snapshot):
    with pytest.raises(UnknownValidatorError):
        compute_connection_limits(snapshot, Pubkey(bytes([9]) * 32))


def test_invalid_identity(snapshot):
    with pytest.raises(InvalidPubkeyError):
        compute_connection_limits(snapshot, "not-a-key")


def test_window_bounds_exceeded_propagates(snapshot):
    config = FlowControlConfig(max_varint=1232 * 200)
    with pytest.raises(VarIntBoundsExceeded):
        compute_connection_limits(snapshot, B, config=config)


def test_limits_log_shortened_validator(caplog, snapshot):
    with caplog.at_level(logging.INFO, logger="stakeflow_sdk.limits"):
        compute_connection_limits(snapshot, B)
    assert f"Validator {str(B)[:8]}... stake: 200" in caplog.text
