"""Protocol constants for the AutoSwappr client.

Centralizes field parameters, well-known addresses and Ekubo pool tiers.
"""

# Starknet field prime: every calldata word lives in [0, FIELD_PRIME)
FIELD_PRIME = 2**251 + 17 * 2**192 + 1

# Selectors are starknet_keccak(name), i.e. keccak256 truncated to 250 bits
SELECTOR_MASK = 2**250 - 1

U8_MAX = 2**8 - 1
U16_MAX = 2**16 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
UINT256_MAX = 2**256 - 1

# Ekubo sqrt price bounds (sqrt(price) * 2^128)
MIN_SQRT_RATIO = 18446748437148339061
MAX_SQRT_RATIO = 6277100250585753475930931601400621808602321654880405518632

# Default limit applied when the caller does not pass one
DEFAULT_SQRT_RATIO_LIMIT = MIN_SQRT_RATIO

# Ekubo fees are 0.128 fixed point fractions of 2^128
EKUBO_FEE_0_05_PERCENT = 170141183460469235273462165868118016
EKUBO_FEE_0_3_PERCENT = 1020847100762815411640772995208708096

# Tick spacing paired with each fee tier
EKUBO_TICK_SPACING_0_1_PERCENT = 1000
EKUBO_TICK_SPACING_0_6_PERCENT = 5982

ZERO_ADDRESS = "0x0"

# Chain ids are short strings encoded as felts
SN_MAIN = 0x534E5F4D41494E
SN_SEPOLIA = 0x534E5F5345504F4C4941

# Token addresses (identical on mainnet and sepolia)
STRK = "0x04718f5a0fc34cc1af16a1cdee98ffb20c31f5cd61d6ab07201858f4287c938d"
ETH = "0x049d36570d4e46f48e99674bd3fcc84644ddd6b96f7c741b1562b82f9e004dc7"
USDC = "0x053c91253bc9682c04929ca02ed00b3e423f6710d2ee7e0d5ebb06f3ecf368a8"
USDT = "0x068f5c6a61780768455de69077e07e89787839bf8166decfbf92b645209c0fb8"
WBTC = "0x03fe2b97c1fd336e750087d68b9b867997fd64a2661ff3ca5a7c771641e8e7ac"

# AutoSwappr deployment
AUTOSWAPPR_MAINNET = "0x05582ad635c43b4c14dbfa53cbde0df32266164a0d1b36e5b510e5b34aeb364b"
EKUBO_CORE = "0xe0e0e08a6a4b9dc7bd67bcb7aade5cf48157d444"
FIBROUS_EXCHANGE = "0x546f9e447a0bce431949233e3139fe68ec85089e"
AVNU_EXCHANGE = "0x6712811c214C50b9E12678327Bae02E44Efc357A"

# (fee, tick_spacing) selected by the destination token of a pool key.
# Pairs whose token1 is not listed must pass fee/tick_spacing explicitly.
POOL_TIERS: dict[str, tuple[int, int]] = {
    USDC: (EKUBO_FEE_0_05_PERCENT, EKUBO_TICK_SPACING_0_1_PERCENT),
    USDT: (EKUBO_FEE_0_3_PERCENT, EKUBO_TICK_SPACING_0_6_PERCENT),
}

__all__ = [
    "FIELD_PRIME",
    "SELECTOR_MASK",
    "U8_MAX",
    "U16_MAX",
    "U32_MAX",
    "U64_MAX",
    "U128_MAX",
    "UINT256_MAX",
    "MIN_SQRT_RATIO",
    "MAX_SQRT_RATIO",
    "DEFAULT_SQRT_RATIO_LIMIT",
    "EKUBO_FEE_0_05_PERCENT",
    "EKUBO_FEE_0_3_PERCENT",
    "EKUBO_TICK_SPACING_0_1_PERCENT",
    "EKUBO_TICK_SPACING_0_6_PERCENT",
    "ZERO_ADDRESS",
    "SN_MAIN",
    "SN_SEPOLIA",
    "STRK",
    "ETH",
    "USDC",
    "USDT",
    "WBTC",
    "AUTOSWAPPR_MAINNET",
    "EKUBO_CORE",
    "FIBROUS_EXCHANGE",
    "AVNU_EXCHANGE",
    "POOL_TIERS",
]
