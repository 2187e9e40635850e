"""Pytest configuration and fixtures."""

import random

import pytest

from tokenswap.curve.constant_price import ConstantPriceCurve
from tokenswap.curve.constant_product import ConstantProductCurve
from tokenswap.pool.lifecycle import PoolLifecycle
from tokenswap.pool.state import PoolState
from tests.helpers import SAMPLE_SEED, SWAP_FEES, WITHDRAW_FEES, make_pool_state


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for the sampled curve tests."""
    return random.Random(SAMPLE_SEED)


@pytest.fixture
def lifecycle() -> PoolLifecycle:
    """Lifecycle without constraints."""
    return PoolLifecycle()


@pytest.fixture
def constant_product() -> ConstantProductCurve:
    return ConstantProductCurve()


@pytest.fixture
def constant_price() -> ConstantPriceCurve:
    """Constant price curve where one token B costs two token A."""
    return ConstantPriceCurve(token_b_price=2)


@pytest.fixture
def pool() -> PoolState:
    """Constant product pool with 1M of each token and no fees."""
    return make_pool_state()


@pytest.fixture
def small_pool() -> PoolState:
    """Constant product pool with 1000 of each token, so shares round visibly."""
    return make_pool_state(reserve_a=1_000, reserve_b=1_000)


@pytest.fixture
def swap_fee_pool() -> PoolState:
    """Constant product pool charging trade, owner and host fees."""
    return make_pool_state(fees=SWAP_FEES)


@pytest.fixture
def withdraw_fee_pool() -> PoolState:
    """Constant product pool charging a 1% owner withdraw fee."""
    return make_pool_state(fees=WITHDRAW_FEES)


@pytest.fixture
def small_withdraw_fee_pool() -> PoolState:
    return make_pool_state(reserve_a=1_000, reserve_b=1_000, fees=WITHDRAW_FEES)
