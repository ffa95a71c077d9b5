import math

import pytest

from utilkit import numeric


def test_is_prime():
    assert numeric.is_prime(2)
    assert numeric.is_prime(17)
    assert not numeric.is_prime(4)
    assert not numeric.is_prime(1)
    assert not numeric.is_prime(9)


def test_gcd_lcm():
    assert numeric.gcd(12, 8) == 4
    assert numeric.lcm(12, 8) == 24
    assert numeric.lcm(0, 5) == 0
    assert numeric.gcd(7, 0) == 7


def test_gcd_rejects_negative():
    with pytest.raises(ValueError):
        numeric.gcd(-4, 2)


def test_fibonacci():
    assert numeric.fibonacci(0) == 0
    assert numeric.fibonacci(1) == 1
    assert numeric.fibonacci(10) == 55
    assert numeric.fibonacci(93) == 12200160415121876738


def test_fibonacci_overflow():
    with pytest.raises(OverflowError):
        numeric.fibonacci(94)


def test_factorial():
    assert numeric.factorial(0) == 1
    assert numeric.factorial(5) == 120
    assert numeric.factorial(20) == 2432902008176640000
    with pytest.raises(OverflowError):
        numeric.factorial(21)


def test_percentage():
    assert numeric.percentage(25.0, 100.0) == 25.0
    assert numeric.percentage(0.0, 100.0) == 0.0
    assert numeric.percentage(5.0, 0.0) == 0.0


def test_growth_rate():
    assert numeric.growth_rate(100.0, 150.0) == 50.0
    assert numeric.growth_rate(0.0, 5.0) == 0.0


def test_base_conversion():
    assert numeric.to_base(255, 16) == "FF"
    assert numeric.from_base("FF", 16) == 255
    assert numeric.to_base(0, 16) == "0"
    assert numeric.to_base(10, 1) == "0"
    assert numeric.from_base("zz", 36) == 1295
    assert numeric.from_base("G", 16) is None
    assert numeric.from_base("", 10) == 0
    assert numeric.from_base("10", 37) is None


@pytest.mark.parametrize("value,base", [(0, 2), (5, 2), (123456789, 36), (2**64 - 1, 16)])
def test_base_round_trip(value, base):
    assert numeric.from_base(numeric.to_base(value, base), base) == value


def test_from_base_overflow():
    with pytest.raises(OverflowError):
        numeric.from_base("F" * 17, 16)


def test_statistics():
    numbers = [1.0, 2.0, 3.0, 4.0, 5.0]
    assert numeric.average(numbers) == 3.0
    assert numeric.median(numbers) == 3.0
    assert numeric.median([4.0, 1.0, 3.0, 2.0]) == 2.5
    assert numeric.average([]) is None
    assert numeric.median([]) is None


def test_median_rejects_nan():
    with pytest.raises(ValueError):
        numeric.median([1.0, math.nan])


def test_mode():
    assert numeric.mode([1, 2, 2, 3]) == 2
    assert numeric.mode([]) is None


def test_standard_deviation():
    assert numeric.standard_deviation([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]) == pytest.approx(
        2.13809, rel=1e-5
    )
    assert numeric.standard_deviation([1.0]) is None


def test_rounding_half_away_from_zero():
    assert numeric.round_to_decimal_places(2.5, 0) == 3.0
    assert numeric.round_to_decimal_places(-2.5, 0) == -3.0
    assert numeric.round_to_decimal_places(3.14159, 2) == 3.14
    assert numeric.ceil_to_decimal_places(3.141, 2) == 3.15
    assert numeric.floor_to_decimal_places(3.149, 2) == 3.14


def test_rounding_keeps_infinity():
    assert numeric.round_to_decimal_places(math.inf, 2) == math.inf


def test_clamp_and_interpolation():
    assert numeric.clamp(5, 0, 3) == 3
    assert numeric.clamp(-1, 0, 3) == 0
    assert numeric.clamp(2, 0, 3) == 2
    assert numeric.lerp(0.0, 10.0, 0.5) == 5.0
    assert numeric.map_range(5.0, 0.0, 10.0, 0.0, 100.0) == 50.0


def test_parsing():
    assert numeric.parse_i32(" 42 ") == 42
    assert numeric.parse_i32("abc") is None
    assert numeric.parse_i32("2147483648") is None
    assert numeric.parse_i64("2147483648") == 2147483648
    assert numeric.parse_f64("1.5") == 1.5


def test_even_odd():
    assert numeric.is_even(4)
    assert numeric.is_odd(-3)
    assert not numeric.is_even(-3)


def test_random_ranges():
    for _ in range(50):
        assert 1 <= numeric.random_int(1, 3) <= 3
        assert 0.5 <= numeric.random_float(0.5, 1.5) <= 1.5
    with pytest.raises(ValueError):
        numeric.random_int(5, 1)
    with pytest.raises(ValueError):
        numeric.random_float(2.0, 1.0)


def test_formatting():
    assert numeric.format_currency(1234.5, "$", 2) == "$1234.50"
    assert numeric.format_with_commas(1234567) == "1,234,567"
    assert numeric.format_with_commas(-1234) == "-1,234"
    assert numeric.format_with_commas(-123) == "-,123"


def test_geometry():
    assert numeric.distance_2d(0.0, 0.0, 3.0, 4.0) == 5.0
    assert numeric.distance_3d(0.0, 0.0, 0.0, 2.0, 3.0, 6.0) == 7.0
    assert numeric.degrees_to_radians(180.0) == math.pi
    assert numeric.radians_to_degrees(math.pi) == 180.0