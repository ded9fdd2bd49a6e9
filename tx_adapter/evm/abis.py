# Minimal ABIs for the contracts the incubator prepares calls against.

_POOL_KEY_COMPONENTS = [
    {"name": "currency0", "type": "address"},
    {"name": "currency1", "type": "address"},
    {"name": "fee", "type": "uint24"},
    {"name": "tickSpacing", "type": "int24"},
    {"name": "hooks", "type": "address"},
]

ERC20_ABI = [
    {
        "name": "transfer",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"type": "bool"}],
    },
    {
        "name": "approve",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"type": "bool"}],
    },
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"type": "uint256"}],
    },
]

CCTP_TOKEN_MESSENGER_ABI = [
    {
        "name": "depositForBurn",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "amount", "type": "uint256"},
            {"name": "destinationDomain", "type": "uint32"},
            {"name": "mintRecipient", "type": "bytes32"},
            {"name": "burnToken", "type": "address"},
        ],
        "outputs": [{"name": "nonce", "type": "uint64"}],
    },
]

POOL_MANAGER_ABI = [
    {
        "name": "initialize",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "key", "type": "tuple", "components": _POOL_KEY_COMPONENTS},
            {"name": "sqrtPriceX96", "type": "uint160"},
        ],
        "outputs": [{"name": "tick", "type": "int24"}],
    },
    {
        "name": "swap",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "key", "type": "tuple", "components": _POOL_KEY_COMPONENTS},
            {
                "name": "params",
                "type": "tuple",
                "components": [
                    {"name": "zeroForOne", "type": "bool"},
                    {"name": "amountSpecified", "type": "int256"},
                    {"name": "sqrtPriceLimitX96", "type": "uint160"},
                ],
            },
            {"name": "hookData", "type": "bytes"},
        ],
        "outputs": [{"name": "delta", "type": "int256"}],
    },
]

BUYBACK_ABI = [
    {
        "name": "executeBuyback",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "usdcAmount", "type": "uint256"},
            {"name": "minConsulOut", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "name": "getQuote",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "usdcAmount", "type": "uint256"}],
        "outputs": [{"name": "consulAmount", "type": "uint256"}],
    },
    {
        "name": "totalBurned",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"type": "uint256"}],
    },
]

ENS_REGISTRY_ABI = [
    {
        "name": "setSubnodeRecord",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "node", "type": "bytes32"},
            {"name": "label", "type": "bytes32"},
            {"name": "owner", "type": "address"},
            {"name": "resolver", "type": "address"},
            {"name": "ttl", "type": "uint64"},
        ],
        "outputs": [],
    },
    {
        "name": "owner",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "node", "type": "bytes32"}],
        "outputs": [{"type": "address"}],
    },
]

ENS_RESOLVER_ABI = [
    {
        "name": "setText",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "node", "type": "bytes32"},
            {"name": "key", "type": "string"},
            {"name": "value", "type": "string"},
        ],
        "outputs": [],
    },
    {
        "name": "text",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "node", "type": "bytes32"},
            {"name": "key", "type": "string"},
        ],
        "outputs": [{"type": "string"}],
    },
]

HUB_DAO_ABI = [
    {
        "name": "proposeBudget",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "amount", "type": "uint256"}],
        "outputs": [],
    },
    {
        "name": "voteOnBudget",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "quarter", "type": "uint256"},
            {"name": "support", "type": "bool"},
        ],
        "outputs": [],
    },
    {
        "name": "approveBudget",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "quarter", "type": "uint256"}],
        "outputs": [],
    },
    {
        "name": "executeBudget",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "quarter", "type": "uint256"},
            {"name": "recipient", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "name": "getTreasuryBalance",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"type": "uint256"}],
    },
    {
        "name": "currentQuarter",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"type": "uint256"}],
    },
]

ANTI_RUG_HOOK_ABI = [
    {
        "name": "initializeVesting",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "key", "type": "tuple", "components": _POOL_KEY_COMPONENTS},
            {"name": "founder", "type": "address"},
            {"name": "cliffDuration", "type": "uint256"},
            {"name": "vestingDuration", "type": "uint256"},
            {"name": "totalLocked", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "name": "getVestingStatus",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "key", "type": "tuple", "components": _POOL_KEY_COMPONENTS},
        ],
        "outputs": [
            {"name": "initialized", "type": "bool"},
            {"name": "founder", "type": "address"},
            {"name": "totalLocked", "type": "uint256"},
            {"name": "vested", "type": "uint256"},
            {"name": "released", "type": "uint256"},
            {"name": "available", "type": "uint256"},
            {"name": "timeUntilFullyVested", "type": "uint256"},
        ],
    },
]
