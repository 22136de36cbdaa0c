"""Two-dimensional gradient (Perlin) noise."""

from __future__ import annotations

import math

_PERMUTATION = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)

_P = _PERMUTATION * 2

_GRADIENTS = (
    (1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0),
    (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0),
)


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    gx, gy = _GRADIENTS[hash_value & 7]
    return gx * x + gy * y


def perlin_noise_2d(x: float, y: float) -> float:
    """Return gradient noise at ``(x, y)`` in the range [-1, 1].

    The noise is zero at every integer lattice point and repeats every
    256 units along both axes.
    """
    x_floor = math.floor(x)
    y_floor = math.floor(y)
    xi = x_floor & 255
    yi = y_floor & 255
    fx = x - x_floor
    fy = y - y_floor

    u = _fade(fx)
    v = _fade(fy)

    a = _P[xi] + yi
    b = _P[xi + 1] + yi
    aa, ab = _P[a], _P[a + 1]
    ba, bb = _P[b], _P[b + 1]

    bottom = _lerp(_grad(aa, fx, fy), _grad(ba, fx - 1.0, fy), u)
    top = _lerp(_grad(ab, fx, fy - 1.0), _grad(bb, fx - 1.0, fy - 1.0), u)
    value = _lerp(bottom, top, v)
    return max(-1.0, min(1.0, value))