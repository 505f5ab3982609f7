"""Matrix composition, inversion and point transforms.

Rotations follow the Three.js convention: Euler angles applied in XYZ
order, i.e. R = Rx * Ry * Rz.
"""

from __future__ import annotations
import math

from planner.core.errors import SingularMatrixError
from planner.models.geometry import Point3D, Vec3
from planner.models.transform import Matrix4


SINGULAR_EPSILON = 1e-12

IDENTITY = Matrix4(elements=(
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
))


def compose(position: Vec3, rotation: Vec3, scale: Vec3 = (1.0, 1.0, 1.0)) -> Matrix4:
    """Build T * R * S from a position, XYZ Euler rotation and scale."""
    a, b = math.cos(rotation[0]), math.sin(rotation[0])
    c, d = math.cos(rotation[1]), math.sin(rotation[1])
    e, f = math.cos(rotation[2]), math.sin(rotation[2])
    ae, af, be, bf = a * e, a * f, b * e, b * f
    sx, sy, sz = scale

    return Matrix4(elements=(
        c * e * sx, -c * f * sy, d * sz, position[0],
        (af + be * d) * sx, (ae - bf * d) * sy, -b * c * sz, position[1],
        (bf - ae * d) * sx, (be + af * d) * sy, a * c * sz, position[2],
        0.0, 0.0, 0.0, 1.0,
    ))


def multiply(left: Matrix4, right: Matrix4) -> Matrix4:
    """Return left * right (right is applied first)."""
    out: list[float] = []
    for i in range(4):
        lrow = left.row(i)
        for j in range(4):
            out.append(sum(lrow[k] * right.get(k, j) for k in range(4)))
    return Matrix4(elements=tuple(out))


def invert(matrix: Matrix4) -> Matrix4:
    """Gauss-Jordan inversion with partial pivoting.

    Raises SingularMatrixError for a non-invertible matrix.
    """
    m = [list(matrix.row(i)) + [1.0 if i == j else 0.0 for j in range(4)] for i in range(4)]

    for col in range(4):
        pivot = max(range(col, 4), key=lambda r: abs(m[r][col]))
        if abs(m[pivot][col]) < SINGULAR_EPSILON:
            raise SingularMatrixError("Transform matrix is not invertible")
        m[col], m[pivot] = m[pivot], m[col]

        p = m[col][col]
        m[col] = [v / p for v in m[col]]
        for r in range(4):
            if r == col:
                continue
            factor = m[r][col]
            if factor != 0.0:
                m[r] = [rv - factor * cv for rv, cv in zip(m[r], m[col])]

    return Matrix4(elements=tuple(v for row in m for v in row[4:]))


def apply_to_point(matrix: Matrix4, point: Point3D) -> Point3D:
    """Transform a point (w = 1) by an affine matrix."""
    x, y, z = point.x, point.y, point.z
    r0, r1, r2 = matrix.row(0), matrix.row(1), matrix.row(2)
    return Point3D(
        x=r0[0] * x + r0[1] * y + r0[2] * z + r0[3],
        y=r1[0] * x + r1[1] * y + r1[2] * z + r1[3],
        z=r2[0] * x + r2[1] * y + r2[2] * z + r2[3],
    )
