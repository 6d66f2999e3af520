import logging
import math
import re
from typing import Any, List

from svgelements import Matrix

from geometry.GeometryConstants import SVG_NUMBER_PRECISION
from geometry.Matrix3 import Matrix3
from geometry.MatrixType import MatrixType

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"([A-Za-z]+)\s*\(([^)]*)\)")
_ARG_SPLIT_RE = re.compile(r"[\s,]+")


class SvgTransform:
    """Matrix3 <-> SVG/CSS transform text and svgelements matrices.

    SVG matrix layout: [a c e; b d f; 0 0 1], column-vector on the right.
    """

    @staticmethod
    def number(value: float) -> str:
        """Fixed-point text; CSS and SVG do not accept exponential notation."""
        # + 0.0 turns -0.0 into 0.0
        return f"{float(value) + 0.0:.{SVG_NUMBER_PRECISION}f}"

    @staticmethod
    def _matrix_text(m: Matrix3) -> str:
        return "matrix(" + ",".join(SvgTransform.number(v) for v in m.to_affine_coefficients()) + ")"

    @staticmethod
    def css_transform(m: Matrix3) -> str:
        """The inner part of a CSS3 transform, always in the general matrix() form."""
        return SvgTransform._matrix_text(m)

    @staticmethod
    def svg_transform(m: Matrix3) -> str:
        """Shortest SVG transform attribute text for the matrix's type."""
        if m.type is MatrixType.IDENTITY:
            return ""
        if m.type is MatrixType.TRANSLATION:
            return f"translate({SvgTransform.number(m.m02)},{SvgTransform.number(m.m12)})"
        if m.type is MatrixType.SCALING:
            if m.m00 == m.m11:
                return f"scale({SvgTransform.number(m.m00)})"
            return f"scale({SvgTransform.number(m.m00)},{SvgTransform.number(m.m11)})"
        return SvgTransform._matrix_text(m)

    @staticmethod
    def to_svg_matrix(m: Matrix3) -> Matrix:
        return Matrix(*m.to_affine_coefficients())

    @staticmethod
    def from_svg_matrix(svg_matrix: Any) -> Matrix3:
        """Accepts svgelements.Matrix or any object exposing a..f."""
        a = getattr(svg_matrix, "a", 1.0)
        b = getattr(svg_matrix, "b", 0.0)
        c = getattr(svg_matrix, "c", 0.0)
        d = getattr(svg_matrix, "d", 1.0)
        e = getattr(svg_matrix, "e", 0.0)
        f = getattr(svg_matrix, "f", 0.0)
        return Matrix3.from_affine_coefficients(a, b, c, d, e, f)

    @staticmethod
    def _directive(name: str, parts: List[float]) -> Matrix3:
        if name == "matrix" and len(parts) == 6:
            return Matrix3.from_affine_coefficients(*parts)
        if name == "translate" and len(parts) in (1, 2):
            tx = parts[0]
            ty = parts[1] if len(parts) == 2 else 0.0
            return Matrix3.translation(tx, ty)
        if name == "scale" and len(parts) in (1, 2):
            sx = parts[0]
            sy = parts[1] if len(parts) == 2 else None
            return Matrix3.scaling(sx, sy)
        if name == "rotate" and len(parts) in (1, 3):
            R = Matrix3.rotation_z(math.radians(parts[0]))
            if len(parts) == 3:
                cx, cy = parts[1], parts[2]
                return Matrix3.translation(cx, cy).times_matrix(R).times_matrix(Matrix3.translation(-cx, -cy))
            return R
        if name == "skewX" and len(parts) == 1:
            return Matrix3(1, math.tan(math.radians(parts[0])), 0,
                           0, 1, 0,
                           0, 0, 1, MatrixType.AFFINE)
        if name == "skewY" and len(parts) == 1:
            return Matrix3(1, 0, 0,
                           math.tan(math.radians(parts[0])), 1, 0,
                           0, 0, 1, MatrixType.AFFINE)
        raise ValueError(f"Bad arguments for {name}: {parts!r}")

    @staticmethod
    def parse(transform_str: str) -> Matrix3:
        """Parse an SVG transform attribute.

        Directives compose left to right, so "translate(..) scale(..)" scales
        first. Unknown directives are skipped.
        """
        transform = Matrix3.identity()
        if not transform_str:
            return transform

        for name, args in _TOKEN_RE.findall(transform_str):
            if name not in ("matrix", "translate", "scale", "rotate", "skewX", "skewY"):
                logger.debug("skipping unsupported transform directive %r", name)
                continue
            parts = [float(p) for p in _ARG_SPLIT_RE.split(args.strip()) if p]
            transform = transform.times_matrix(SvgTransform._directive(name, parts))
        return transform
