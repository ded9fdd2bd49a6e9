import unittest

from eth_abi import encode
from eth_utils import keccak

from tx_adapter.evm import BuildError, UnsupportedChain, UnsupportedFeeTier, parse_chain
from tx_adapter.evm import chains
from tx_adapter.evm.chains import Chain, chain_id_for
from tx_adapter.evm.encoding import ZERO_ADDRESS
from tx_adapter.evm.pool_key import compute_pool_id, create_pool_key, tick_spacing_for

TOKEN_A = "0x" + "ab" * 20
TOKEN_B = "0x" + "12" * 20
HOOK = "0x" + "44" * 20


class PoolKeyTests(unittest.TestCase):
    def test_order_independent(self) -> None:
        forward = create_pool_key(TOKEN_A, TOKEN_B, 3000)
        backward = create_pool_key(TOKEN_B, TOKEN_A, 3000)

        self.assertEqual(forward, backward)
        self.assertEqual(forward.currency0.lower(), TOKEN_B)
        self.assertEqual(forward.currency1.lower(), TOKEN_A)
        self.assertEqual(forward.tick_spacing, 60)
        self.assertEqual(forward.hooks, ZERO_ADDRESS)

    def test_tick_spacing_table(self) -> None:
        self.assertEqual(tick_spacing_for(500), 10)
        self.assertEqual(tick_spacing_for(3000), 60)
        self.assertEqual(tick_spacing_for(10000), 200)
        for fee in (100, 0, True, "3000"):
            with self.assertRaises(UnsupportedFeeTier):
                tick_spacing_for(fee)

    def test_rejects_identical_tokens(self) -> None:
        with self.assertRaises(BuildError):
            create_pool_key(TOKEN_A, TOKEN_A.upper().replace("0X", "0x"), 500)

    def test_pool_id_is_hash_of_encoded_key(self) -> None:
        key = create_pool_key(TOKEN_A, TOKEN_B, 500, HOOK)
        expected = keccak(
            encode(["address", "address", "uint24", "int24", "address"], list(key.as_tuple()))
        )

        pool_id = compute_pool_id(key)
        self.assertEqual(pool_id, "0x" + expected.hex())
        self.assertEqual(len(pool_id), 66)
        self.assertEqual(pool_id, compute_pool_id(create_pool_key(TOKEN_B, TOKEN_A, 500, HOOK)))
        self.assertNotEqual(pool_id, compute_pool_id(create_pool_key(TOKEN_A, TOKEN_B, 500)))


class ChainTests(unittest.TestCase):
    def test_parse_chain_spellings(self) -> None:
        self.assertIs(parse_chain("base"), Chain.BASE)
        self.assertIs(parse_chain("Base-Sepolia"), Chain.BASE_SEPOLIA)
        self.assertIs(parse_chain("baseSepolia"), Chain.BASE_SEPOLIA)
        self.assertIs(parse_chain(42161), Chain.ARBITRUM)
        self.assertIs(parse_chain("137"), Chain.POLYGON)
        self.assertEqual(chain_id_for(Chain.SEPOLIA), 11155111)

    def test_unknown_chain(self) -> None:
        for value in ("solana", 999, True, None):
            with self.assertRaises(UnsupportedChain):
                parse_chain(value)

    def test_chain_tables_are_read_only(self) -> None:
        tables = (
            chains.CHAIN_IDS,
            chains.USDC_ADDRESSES,
            chains.CCTP_TOKEN_MESSENGERS,
            chains.CCTP_DOMAINS,
            chains.POOL_MANAGERS,
            chains.ENS_REGISTRIES,
            chains.ENS_PUBLIC_RESOLVERS,
        )
        for table in tables:
            with self.assertRaises(TypeError):
                table[Chain.BASE] = 0


if __name__ == "__main__":
    unittest.main()
