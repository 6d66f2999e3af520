# Fixed decimal places used for SVG/CSS numbers, large enough that no value
# ever needs exponential notation.
SVG_NUMBER_PRECISION = 20

# |a.b| above 1 - epsilon sends rotate_a_to_b down the near-parallel branch.
ROTATE_PARALLEL_EPSILON = 1e-4
