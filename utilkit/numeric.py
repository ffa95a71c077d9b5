"""Number parsing, arithmetic helpers, statistics and base conversion."""

from __future__ import annotations

import math
import operator
import random
from collections import Counter
from functools import reduce
from typing import Callable, Sequence, TypeVar

from utilkit.convert import number_to_string_formatted, str_to_f64, str_to_i32, str_to_i64

_U64_MAX = 2**64 - 1
_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

T = TypeVar("T")


def _require_unsigned(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative")


def _check_u64(value: int) -> int:
    if value > _U64_MAX:
        raise OverflowError("result does not fit in an unsigned 64-bit integer")
    return value


def _ieee_div(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _round_half_away(x: float) -> float:
    whole = math.trunc(x)
    if abs(x - whole) >= 0.5:
        whole += 1 if x > 0 else -1
    return float(whole)


def _scaled(op: Callable[[float], float], n: float, places: int) -> float:
    _require_unsigned(places, "places")
    try:
        multiplier = 10.0**places
    except OverflowError:
        multiplier = math.inf
    scaled = n * multiplier
    if math.isfinite(scaled):
        result = op(scaled)
        if result == 0:
            result = math.copysign(0.0, scaled)
    else:
        result = scaled
    return _ieee_div(result, multiplier)


def parse_i32(s: str) -> int | None:
    """Parse a 32-bit signed integer, or return None."""
    return str_to_i32(s)


def parse_i64(s: str) -> int | None:
    """Parse a 64-bit signed integer, or return None."""
    return str_to_i64(s)


def parse_f64(s: str) -> float | None:
    """Parse a double-precision number, or return None."""
    return str_to_f64(s)


def is_even(n: int) -> bool:
    return n % 2 == 0


def is_odd(n: int) -> bool:
    return n % 2 != 0


def is_prime(n: int) -> bool:
    """Trial-division primality test."""
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    return all(n % i for i in range(3, math.isqrt(n) + 1, 2))


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of two non-negative integers."""
    _require_unsigned(a, "a")
    _require_unsigned(b, "b")
    while b:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    """Least common multiple; 0 if either argument is 0."""
    _require_unsigned(a, "a")
    _require_unsigned(b, "b")
    if a == 0 or b == 0:
        return 0
    return _check_u64(a * b) // gcd(a, b)


def factorial(n: int) -> int:
    """n!; raise OverflowError past the unsigned 64-bit range."""
    _require_unsigned(n, "n")
    return _check_u64(math.factorial(n))


def fibonacci(n: int) -> int:
    """The n-th Fibonacci number; raise OverflowError past the 64-bit range."""
    _require_unsigned(n, "n")
    a, b = 0, 1
    if n == 0:
        return 0
    for _ in range(n - 1):
        a, b = b, _check_u64(a + b)
    return b


def round_to_decimal_places(n: float, places: int) -> float:
    """Round half away from zero to the given decimal places."""
    return _scaled(_round_half_away, n, places)


def ceil_to_decimal_places(n: float, places: int) -> float:
    return _scaled(lambda x: float(math.ceil(x)), n, places)


def floor_to_decimal_places(n: float, places: int) -> float:
    return _scaled(lambda x: float(math.floor(x)), n, places)


def clamp(value: T, low: T, high: T) -> T:
    """Limit a value to the closed range [low, high]."""
    if value < low:  # type: ignore[operator]
        return low
    if value > high:  # type: ignore[operator]
        return high
    return value


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between start and end."""
    return start + (end - start) * t


def map_range(
    value: float, from_min: float, from_max: float, to_min: float, to_max: float
) -> float:
    """Map a value from one range onto another."""
    normalized = _ieee_div(value - from_min, from_max - from_min)
    return lerp(to_min, to_max, normalized)


def percentage(part: float, total: float) -> float:
    """part as a percentage of total; 0 when total is 0."""
    if total == 0.0:
        return 0.0
    return part / total * 100.0


def growth_rate(old_value: float, new_value: float) -> float:
    """Percentage change from old to new; 0 when old is 0."""
    if old_value == 0.0:
        return 0.0
    return (new_value - old_value) / old_value * 100.0


def random_int(low: int, high: int) -> int:
    """A random integer in the closed range [low, high]."""
    if low > high:
        raise ValueError("empty range")
    return random.randint(low, high)


def random_float(low: float, high: float) -> float:
    """A random float in the closed range [low, high]."""
    if not low <= high:
        raise ValueError("empty range")
    return random.uniform(low, high)


def average(numbers: Sequence[float]) -> float | None:
    """Arithmetic mean, or None for an empty sequence."""
    if not numbers:
        return None
    return reduce(operator.add, numbers, 0.0) / len(numbers)


def median(numbers: Sequence[float]) -> float | None:
    """Median, or None for an empty sequence; raise ValueError on NaN."""
    if not numbers:
        return None
    if any(math.isnan(x) for x in numbers):
        raise ValueError("cannot order NaN")
    ordered = sorted(numbers)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2.0
    return ordered[mid]


def mode(numbers: Sequence[int]) -> int | None:
    """Most frequent value, or None for an empty sequence."""
    if not numbers:
        return None
    return Counter(numbers).most_common(1)[0][0]


def standard_deviation(numbers: Sequence[float]) -> float | None:
    """Sample standard deviation, or None for fewer than two values."""
    if len(numbers) < 2:
        return None
    mean = average(numbers)
    assert mean is not None
    squares = reduce(operator.add, ((x - mean) ** 2 for x in numbers), 0.0)
    return math.sqrt(squares / (len(numbers) - 1))


def to_base(num: int, base: int) -> str:
    """Render a non-negative integer in base 2-36; '0' for an invalid base."""
    _require_unsigned(num, "num")
    if not 2 <= base <= 36 or num == 0:
        return "0"
    digits: list[str] = []
    while num > 0:
        num, remainder = divmod(num, base)
        digits.append(_DIGITS[remainder])
    return "".join(reversed(digits))


def _digit_value(ch: str) -> int | None:
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    return None


def from_base(s: str, base: int) -> int | None:
    """Parse digits in base 2-36, or return None; raise OverflowError past 64 bits."""
    if not 2 <= base <= 36:
        return None
    result = 0
    for ch in s:
        digit = _digit_value(ch)
        if digit is None or digit >= base:
            return None
        result = result * base + digit
    return _check_u64(result)


def format_currency(amount: float, currency_symbol: str, decimal_places: int) -> str:
    """Prefix a fixed-decimal amount with a currency symbol."""
    return f"{currency_symbol}{number_to_string_formatted(amount, decimal_places)}"


def format_with_commas(num: int) -> str:
    """Group the decimal digits of an integer in threes, from the right."""
    text = str(num)
    groups: list[str] = []
    end = len(text)
    while end > 0:
        start = max(0, end - 3)
        groups.append(text[start:end])
        end = start
    return ",".join(reversed(groups))


def distance_2d(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def distance_3d(x1: float, y1: float, z1: float, x2: float, y2: float, z2: float) -> float:
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2 + (z2 - z1) ** 2)


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi