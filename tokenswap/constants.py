"""Protocol constants for the token swap engine.

Centralizes integer domain bounds and pool parameters shared by the curves,
the fee model and the pool lifecycle.
"""

# Integer domains. Reserves and user-facing amounts live in u64 at the asset
# layer; curve math is checked against u128, with u256 for a few products
# that can exceed it.
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
U256_MAX = 2**256 - 1

# Initial amount of pool tokens minted at pool creation. Fixed rather than
# derived from the deposited reserves (Uniswap uses the geometric mean of the
# inputs, Balancer 100 * 10^18).
INITIAL_SWAP_POOL_AMOUNT = 1_000_000_000

# Relative tolerance (basis points) between a one-sided deposit or withdrawal
# and the equivalent swap plus two-sided operation.
CONVERSION_BASIS_POINTS_GUARANTEE = 50
