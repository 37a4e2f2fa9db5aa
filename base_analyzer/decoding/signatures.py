"""Event topic0 values (keccak256 of the canonical event signature)."""

# ERC-20 and ERC-721 share the signature; the topic count tells them apart
TRANSFER = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
APPROVAL = "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"

# Uniswap V2 style pools (also Aerodrome)
V2_MINT = "0x4c209b5fc8ad50758f13e2e1088ba56a560dff690a1c6fef26394f4c03821c4f"
V2_BURN = "0xdccd412f0b1252819cb1fd330b93224ca42612892bb3f4f789976e6d81936496"
V2_SWAP = "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"
V2_SYNC = "0x1c411e9a96e071241c2f21f7726b17ae89e3cab4c78be50e062b03a9fffbbad1"

# Uniswap V3 pools
V3_MINT = "0x7a53080ba414158be7ec69b987b5fb7d07dee101fe85488f0853ae16239d0bde"
V3_BURN = "0x0c396cd989a39f4459b5fa1aed6a9a8dcdbc45908acfd67e028cd568da98982c"
V3_SWAP = "0xc42079f94a6350d7e6235f29174924f928cc2ac818eb64fed8004e115fbcca67"

# StakingRewards style farms
STAKED = "0x9e71bc8eea02a63969f509818f2dafb9254532904319f9dbda79b67bd34a5f3d"
WITHDRAWN = "0x7084f5476618d8e60b11ef0d7d3f06914655adb8793e28ff7f018d4c76d505d5"
REWARD_PAID = "0xe2403640ba68fed3a2f88b7557551d1993f84b99bb10ff833f0cf8db0c5e0486"

WETH_DEPOSIT = "0xe1fffcc4923d04b559f4d29a8bfc6cda04eb5b0d3c460751c2402c5c5cc9109c"
WETH_WITHDRAWAL = "0x7fcf532c15f0a6db0bd6d0e038bea71d30d808c7d98cb3bf7268a95bf5081b65"

# OptimismPortal
WITHDRAWAL_PROVEN = "0x67a6208cfcc0801d50f6cbe764733f4fddf66ac0b04442061a8a8c0cb6b63f62"
WITHDRAWAL_FINALIZED = "0xdb5c7652857aa163daadd670e116628fb42e869d8ac4251ef8971d9e5727df1b"

# Signatures that are recognized by name but not decoded into typed events
EVENT_NAMES: dict[str, str] = {
    APPROVAL: "Approval",
    V2_SWAP: "Swap",
    V2_SYNC: "Sync",
    V3_SWAP: "Swap",
    WETH_DEPOSIT: "Deposit",
    WETH_WITHDRAWAL: "Withdrawal",
    WITHDRAWAL_PROVEN: "WithdrawalProven",
    WITHDRAWAL_FINALIZED: "WithdrawalFinalized",
    TRANSFER: "Transfer",
    V2_MINT: "Mint",
    V2_BURN: "Burn",
    V3_MINT: "Mint",
    V3_BURN: "Burn",
    STAKED: "Staked",
    WITHDRAWN: "Withdrawn",
    REWARD_PAID: "RewardPaid",
}
