"""Tests for the consensus matrix builder, degree filter and reorderer."""

from math import comb

import numpy as np
import pandas as pd
import pytest

from consensus import build_consensus_matrix, filter_by_degree, reorder_consensus

MIXED = [[1, 1, 2, 2], [1, 2, 2, 1], [1, 1, 1, 2], [2, 2, 1, 1]]
AGREEING = [[1, 1, 2, 2]] * 4


def test_mixed_labels_follow_pair_counting_rule():
    """Each entry counts the label vectors that put the pair in one cluster."""
    matrix = build_consensus_matrix(MIXED, k=2)

    assert matrix.to_numpy().tolist() == [
        [0, 3, 1, 1],
        [3, 0, 2, 0],
        [1, 2, 0, 2],
        [1, 0, 2, 0],
    ]
    assert list(matrix.index) == [1, 2, 3, 4]


def test_identical_labels_give_block_diagonal_matrix():
    matrix = build_consensus_matrix(AGREEING, k=2)

    expected = np.array([[0, 4, 0, 0], [4, 0, 0, 0], [0, 0, 0, 4], [0, 0, 4, 0]])
    np.testing.assert_array_equal(matrix.to_numpy(), expected)


def test_matrix_invariants_on_random_labels():
    """Symmetry, zero diagonal, value range and conserved pair totals."""
    rng = np.random.default_rng(7)
    vectors = [rng.integers(1, 5, size=30) for _ in range(4)]

    values = build_consensus_matrix(vectors, k=4).to_numpy()

    np.testing.assert_array_equal(values, values.T)
    assert (np.diag(values) == 0).all()
    assert values.min() >= 0 and values.max() <= 4
    expected_total = sum(
        2 * comb(int((labels == c).sum()), 2) for labels in vectors for c in range(1, 5))
    assert values.sum() == expected_total


def test_singletons_and_empty_clusters_contribute_nothing():
    matrix = build_consensus_matrix([[1, 2, 3], [1, 2, 3]], k=5)

    assert matrix.to_numpy().sum() == 0


def test_identifiers_label_rows_and_columns():
    matrix = build_consensus_matrix(AGREEING, ids=["a", "b", "c", "d"])

    assert list(matrix.index) == ["a", "b", "c", "d"]
    assert list(matrix.columns) == ["a", "b", "c", "d"]
    assert matrix.loc["c", "d"] == 4


@pytest.mark.parametrize("n", [0, 1])
def test_degenerate_sizes_return_well_formed_matrix(n):
    matrix = build_consensus_matrix([[1] * n] * 4, k=2)

    assert matrix.shape == (n, n)
    assert matrix.to_numpy().sum() == 0


def test_unequal_lengths_rejected():
    with pytest.raises(ValueError, match="different lengths"):
        build_consensus_matrix([[1, 1, 2], [1, 2]])


def test_labels_outside_k_rejected():
    with pytest.raises(ValueError, match="1..2"):
        build_consensus_matrix([[1, 3, 2]], k=2)


def test_identifier_count_must_match():
    with pytest.raises(ValueError, match="identifiers"):
        build_consensus_matrix(AGREEING, ids=["a", "b"])


def test_degree_all_returns_matrix_unchanged():
    matrix = build_consensus_matrix(MIXED, k=2)

    assert filter_by_degree(matrix, 5) is matrix


def test_degree_four_on_agreeing_labels_keeps_both_blocks():
    matrix = build_consensus_matrix(AGREEING, k=2)

    filtered = filter_by_degree(matrix, 4)

    assert filtered.shape == (4, 4)
    np.testing.assert_array_equal(filtered.to_numpy(), matrix.to_numpy())


def test_degree_filter_keeps_only_matching_pairs():
    matrix = build_consensus_matrix(MIXED, k=2, ids=["a", "b", "c", "d"])

    filtered = filter_by_degree(matrix, 2)

    assert list(filtered.index) == ["b", "c", "d"]
    assert set(np.unique(filtered.to_numpy())) == {0, 2}
    assert filtered.loc["b", "c"] == 2 and filtered.loc["c", "d"] == 2
    assert filtered.loc["b", "d"] == 0


def test_degree_filter_does_not_mutate_input():
    matrix = build_consensus_matrix(MIXED, k=2)
    before = matrix.copy()

    filter_by_degree(matrix, 1)

    pd.testing.assert_frame_equal(matrix, before)


def test_degree_without_matches_gives_empty_matrix():
    matrix = build_consensus_matrix(AGREEING, k=2)

    filtered = filter_by_degree(matrix, 3)

    assert filtered.shape == (0, 0)
    assert reorder_consensus(filtered, 2).shape == (0, 0)


def test_invalid_degree_rejected():
    matrix = build_consensus_matrix(AGREEING, k=2)

    with pytest.raises(ValueError, match="Degree"):
        filter_by_degree(matrix, 0)


def test_reorder_groups_blocks_and_preserves_values():
    """Interleaved blocks end up adjacent; values and symmetry are untouched."""
    matrix = build_consensus_matrix([[1, 2, 1, 2, 1, 2]] * 4, k=2, ids=list("abcdef"))

    reordered = reorder_consensus(matrix, 2)

    order = list(reordered.index)
    assert sorted(order) == list("abcdef")
    assert set(order[:3]) in ({"a", "c", "e"}, {"b", "d", "f"})
    assert list(reordered.columns) == order
    values = reordered.to_numpy()
    np.testing.assert_array_equal(values, values.T)
    assert sorted(values.ravel()) == sorted(matrix.to_numpy().ravel())
    pd.testing.assert_frame_equal(reordered.loc[list("abcdef"), list("abcdef")], matrix)


def test_reorder_clamps_k_to_matrix_size():
    matrix = build_consensus_matrix(AGREEING, k=2)

    reordered = reorder_consensus(matrix, 10)

    assert reordered.shape == (4, 4)
    assert sorted(reordered.to_numpy().ravel()) == sorted(matrix.to_numpy().ravel())


def test_reorder_leaves_all_zero_matrix_in_place():
    matrix = build_consensus_matrix([[1, 2, 3]] * 4, k=3)

    reordered = reorder_consensus(matrix, 2)

    pd.testing.assert_frame_equal(reordered, matrix)
