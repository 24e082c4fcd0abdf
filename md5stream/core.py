from __future__ import annotations

from typing import Callable, Tuple

MASK32 = 0xFFFFFFFF


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


def swap32(x: int) -> int:
    # reverse the byte order of one word
    x &= MASK32
    return (((x << 8) | (x >> 24)) & 0x00FF00FF) | (((x << 24) | (x >> 8)) & 0xFF00FF00)


# MD5 initial value (A, B, C, D)
MD5_IV: Tuple[int, int, int, int] = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

# T[i] = floor(2^32 * abs(sin(i + 1))), RFC 1321 values
T: Tuple[int, ...] = (
    0xD76AA478, 0xE8C7B756, 0x242070DB, 0xC1BDCEEE,
    0xF57C0FAF, 0x4787C62A, 0xA8304613, 0xFD469501,
    0x698098D8, 0x8B44F7AF, 0xFFFF5BB1, 0x895CD7BE,
    0x6B901122, 0xFD987193, 0xA679438E, 0x49B40821,
    0xF61E2562, 0xC040B340, 0x265E5A51, 0xE9B6C7AA,
    0xD62F105D, 0x02441453, 0xD8A1E681, 0xE7D3FBC8,
    0x21E1CDE6, 0xC33707D6, 0xF4D50D87, 0x455A14ED,
    0xA9E3E905, 0xFCEFA3F8, 0x676F02D9, 0x8D2A4C8A,
    0xFFFA3942, 0x8771F681, 0x6D9D6122, 0xFDE5380C,
    0xA4BEEA44, 0x4BDECFA9, 0xF6BB4B60, 0xBEBFBC70,
    0x289B7EC6, 0xEAA127FA, 0xD4EF3085, 0x04881D05,
    0xD9D4D039, 0xE6DB99E5, 0x1FA27CF8, 0xC4AC5665,
    0xF4292244, 0x432AFF97, 0xAB9423A7, 0xFC93A039,
    0x655B59C3, 0x8F0CCC92, 0xFFEFF47D, 0x85845DD1,
    0x6FA87E4F, 0xFE2CE6E0, 0xA3014314, 0x4E0811A1,
    0xF7537E82, 0xBD3AF235, 0x2AD7D2BB, 0xEB86D391,
)

# Rotation amounts per round
RC: Tuple[int, ...] = tuple(
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)


def F(x: int, y: int, z: int) -> int:
    return (x & y) | (~x & z)


def G(x: int, y: int, z: int) -> int:
    return (x & z) | (y & ~z)


def H(x: int, y: int, z: int) -> int:
    return x ^ y ^ z


def I(x: int, y: int, z: int) -> int:  # noqa: E743
    return u32(y ^ (x | (~z & MASK32)))


def _step(mix: Callable[[int, int, int], int]) -> Callable[..., int]:
    def step(a: int, b: int, c: int, d: int, x: int, s: int, t: int) -> int:
        n = a + mix(b, c, d) + x + t
        return u32(rl(n, s) + b)

    step.__name__ = mix.__name__ * 2
    return step


FF = _step(F)
GG = _step(G)
HH = _step(H)
II = _step(I)

STEPS: Tuple[Callable[..., int], ...] = (FF,) * 16 + (GG,) * 16 + (HH,) * 16 + (II,) * 16


def wt_index(t: int) -> int:
    if 0 <= t < 16:
        return t
    if 16 <= t < 32:
        return (5 * t + 1) % 16
    if 32 <= t < 48:
        return (3 * t + 5) % 16
    if 48 <= t < 64:
        return (7 * t) % 16
    raise ValueError("t out of range")
