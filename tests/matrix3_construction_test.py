import math
import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from geometry.GeometryErrors import DegenerateNormalizationError, UnknownClassificationError
from geometry.Matrix3 import Matrix3
from geometry.MatrixType import MatrixType
from geometry.Vector2 import Vector2
from geometry.Vector3 import Vector3


def test_default_constructor_is_affine_identity_entries():
    m = Matrix3()
    assert m.equals(Matrix3.IDENTITY)
    # raw constructor never infers IDENTITY
    assert m.type is MatrixType.AFFINE


def test_raw_constructor_infers_affine_from_bottom_row():
    assert Matrix3(1, 2, 3, 4, 5, 6, 0, 0, 1).type is MatrixType.AFFINE
    assert Matrix3(1, 2, 3, 4, 5, 6, 0, 0, 2).type is MatrixType.OTHER
    assert Matrix3(1, 2, 3, 4, 5, 6, 0, 1e-300, 1).type is MatrixType.OTHER


def test_explicit_tag_must_be_a_matrix_type():
    with pytest.raises(UnknownClassificationError):
        Matrix3(1, 0, 0, 0, 1, 0, 0, 0, 1, "identity")
    with pytest.raises(ValueError):
        Matrix3(1, 0, 0, 0, 1, 0, 0, 0, 1, 1)


def test_named_factories_have_tight_tags():
    assert Matrix3.identity().type is MatrixType.IDENTITY
    assert Matrix3.translation(3, 4).type is MatrixType.TRANSLATION
    assert Matrix3.translation_from_vector(Vector2(3, 4)).equals(Matrix3.translation(3, 4))
    assert Matrix3.scaling(2, 3).type is MatrixType.SCALING
    assert Matrix3.rotation_z(0.3).type is MatrixType.AFFINE
    assert Matrix3.rotation_2(0.3).type is MatrixType.AFFINE
    assert Matrix3.rotation_x(0.3).type is MatrixType.OTHER
    assert Matrix3.rotation_y(0.3).type is MatrixType.OTHER
    assert Matrix3.rotation_axis_angle(Vector3.Z_UNIT, 0.3).type is MatrixType.OTHER
    assert Matrix3.from_affine_coefficients(1, 2, 3, 4, 5, 6).type is MatrixType.AFFINE


def test_single_argument_scaling_is_uniform():
    m = Matrix3.scale(2)
    assert (m.m00, m.m11, m.m22) == (2, 2, 1)
    assert m.m01 == m.m02 == m.m10 == m.m12 == 0


def test_translation_entries():
    m = Matrix3.translation(3, 4)
    assert m.to_numpy().tolist() == [[1, 0, 3], [0, 1, 4], [0, 0, 1]]


def test_affine_coefficients_layout():
    m = Matrix3.from_affine_coefficients(1, 2, 3, 4, 5, 6)
    assert m.to_numpy().tolist() == [[1, 3, 5], [2, 4, 6], [0, 0, 1]]


def test_axis_angle_around_z_matches_rotation_z():
    angle = 0.7
    m = Matrix3.rotation_axis_angle(Vector3.Z_UNIT, angle)
    assert m.equals_epsilon(Matrix3.rotation_z(angle), 1e-12)


def test_axis_angle_around_x_matches_rotation_x():
    m = Matrix3.rotation_axis_angle(Vector3.X_UNIT, -1.1)
    assert m.equals_epsilon(Matrix3.rotation_x(-1.1), 1e-12)


def test_rotation_y_turns_z_into_x():
    v = Matrix3.rotation_y(math.pi / 2).times_vector3(Vector3(0, 0, 1))
    assert v.equals(Vector3(1, 0, 0), 1e-12)


def test_rotate_a_to_b_general_case():
    m = Matrix3.rotate_a_to_b(Vector3.X_UNIT, Vector3.Y_UNIT)
    assert m.times_vector3(Vector3.X_UNIT).equals(Vector3(0, 1, 0), 1e-12)
    assert abs(m.determinant - 1) < 1e-12


def test_rotate_a_to_b_parallel_and_opposite():
    same = Matrix3.rotate_a_to_b(Vector3.X_UNIT, Vector3(2, 0, 0))
    assert same.equals_epsilon(Matrix3.IDENTITY, 1e-12)

    opposite = Matrix3.rotate_a_to_b(Vector3.X_UNIT, Vector3(-1, 0, 0))
    assert opposite.times_vector3(Vector3.X_UNIT).equals(Vector3(-1, 0, 0), 1e-12)


def test_rotate_a_to_b_rejects_zero_vectors():
    with pytest.raises(DegenerateNormalizationError):
        Matrix3.rotate_a_to_b(Vector3.ZERO, Vector3.X_UNIT)


def test_from_numpy_round_trip():
    rows = [[1, 2, 3], [4, 5, 6], [7, 8, 10]]
    m = Matrix3.from_numpy(rows)
    assert m.to_numpy().tolist() == rows
    assert m.type is MatrixType.OTHER
    assert (m.m00, m.m01, m.m02, m.m10, m.m11, m.m12, m.m20, m.m21, m.m22) == (1, 2, 3, 4, 5, 6, 7, 8, 10)
    assert m[2, 1] == 8


def test_column_major_matches_row_major():
    a = Matrix3().row_major(1, 2, 3, 4, 5, 6, 7, 8, 9)
    b = Matrix3().column_major(1, 4, 7, 2, 5, 8, 3, 6, 9)
    assert a.equals(b)


def test_index_out_of_range():
    with pytest.raises(IndexError):
        Matrix3.IDENTITY[3, 0]


def test_every_named_factory_builds():
    assert Matrix3.identity().equals(Matrix3.IDENTITY)
    assert Matrix3.translation(3, 4).to_numpy().tolist() == [[1, 0, 3], [0, 1, 4], [0, 0, 1]]
    assert Matrix3.translation_from_vector(Vector2(3, 4)).type is MatrixType.TRANSLATION
    assert Matrix3.scaling(2, 3).to_numpy().tolist() == [[2, 0, 0], [0, 3, 0], [0, 0, 1]]
    assert Matrix3.scale(2).equals(Matrix3.scaling(2, 2))
    assert Matrix3.rotation_axis_angle(Vector3.Y_UNIT, 0.2).equals_epsilon(Matrix3.rotation_y(0.2), 1e-12)
    assert Matrix3.rotation_x(0).equals(Matrix3.IDENTITY)
    assert Matrix3.rotation_y(0).equals(Matrix3.IDENTITY)
    assert Matrix3.rotation_z(0).equals(Matrix3.IDENTITY)
    assert Matrix3.rotation_2(0.4).equals(Matrix3.rotation_z(0.4))
    assert Matrix3.from_affine_coefficients(1, 0, 0, 1, 3, 4).equals(Matrix3.translation(3, 4))
    assert Matrix3.from_numpy([[1, 0, 3], [0, 1, 4], [0, 0, 1]]).equals(Matrix3.translation(3, 4))
    assert Matrix3.rotate_a_to_b(Vector3.Y_UNIT, Vector3.Y_UNIT).equals_epsilon(Matrix3.IDENTITY, 1e-12)


def test_translation_factory_and_component_are_distinct():
    m = Matrix3.translation(3, 4)
    assert m.translation_component == Vector2(3, 4)
    assert m.times_vector2(Vector2(1, 1)) == Vector2(4, 5)


def test_constructor_accepts_matrix_type_keyword():
    m = Matrix3(1, 0, 0, 0, 1, 0, 0, 0, 1, matrix_type=MatrixType.IDENTITY)
    assert m.type is MatrixType.IDENTITY
