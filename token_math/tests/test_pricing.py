"""Square-root price encoding and slippage bounds."""

import unittest

from token_math.amounts import InvalidAmount
from token_math.pricing import (
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    Q96,
    calculate_min_output,
    price_to_sqrt_price_x96,
    sqrt_price_x96_to_price,
)


class SqrtPriceTests(unittest.TestCase):
    def test_exact_squares_encode_exactly(self) -> None:
        self.assertEqual(price_to_sqrt_price_x96(1), Q96)
        self.assertEqual(price_to_sqrt_price_x96("4"), 2 * Q96)
        self.assertEqual(price_to_sqrt_price_x96(0.25), Q96 // 2)

    def test_encoding_floors(self) -> None:
        encoded = price_to_sqrt_price_x96(2)
        self.assertLessEqual(encoded * encoded, 2 * Q96 * Q96)
        self.assertGreater((encoded + 1) * (encoded + 1), 2 * Q96 * Q96)

    def test_decode_inverts_encode(self) -> None:
        self.assertEqual(sqrt_price_x96_to_price(Q96), 1.0)
        self.assertEqual(sqrt_price_x96_to_price(2 * Q96), 4.0)
        for price in (0.0001, 1.5, 2500.0):
            with self.subTest(price=price):
                decoded = sqrt_price_x96_to_price(price_to_sqrt_price_x96(price))
                self.assertAlmostEqual(decoded, price, delta=price * 1e-12)

    def test_encoding_is_monotonic(self) -> None:
        prices = (0.001, 0.5, 1, 1.0001, 3, 1000)
        encoded = [price_to_sqrt_price_x96(price) for price in prices]
        self.assertEqual(encoded, sorted(encoded))

    def test_invalid_prices_rejected(self) -> None:
        for price in (0, -1, "abc", float("nan"), "1e80", "1e-80"):
            with self.subTest(price=price):
                with self.assertRaises(InvalidAmount):
                    price_to_sqrt_price_x96(price)
        with self.assertRaises(InvalidAmount):
            sqrt_price_x96_to_price(0)

    def test_bounds_are_ordered(self) -> None:
        self.assertLess(MIN_SQRT_PRICE, Q96)
        self.assertLess(Q96, MAX_SQRT_PRICE)


class MinOutputTests(unittest.TestCase):
    def test_half_percent_slippage(self) -> None:
        self.assertEqual(calculate_min_output(1000, 50), 995)
        self.assertEqual(calculate_min_output(1000), 995)

    def test_truncates_instead_of_rounding(self) -> None:
        self.assertEqual(calculate_min_output(999, 50), 994)
        self.assertEqual(calculate_min_output(1, 1), 0)

    def test_bounds(self) -> None:
        self.assertEqual(calculate_min_output(1000, 0), 1000)
        self.assertEqual(calculate_min_output(1000, 10_000), 0)

    def test_invalid_inputs_rejected(self) -> None:
        for expected, bps in ((1000, -1), (1000, 10_001), (-5, 50), (1.5, 50), (1000, 0.5)):
            with self.subTest(expected=expected, bps=bps):
                with self.assertRaises(InvalidAmount):
                    calculate_min_output(expected, bps)


if __name__ == "__main__":
    unittest.main()
