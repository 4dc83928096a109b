"""Tests for RowAligner and input resolution."""

import numpy as np
import pandas as pd
import pytest

from modeltidy.aligner import Observations, RowAligner, resolve_input
from modeltidy.exceptions import AlignmentError, InputError
from modeltidy.options import normalize_options

# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def aligner():
    return RowAligner()


@pytest.fixture()
def data():
    return pd.DataFrame({"x": [1.0, 2.0, np.nan, 4.0, 5.0], "g": list("abcde")})


# ------------------------------------------------------------------ #
# Correspondence
# ------------------------------------------------------------------ #


class TestByPosition:
    def test_missing_rows_filled(self, aligner, data):
        obs = Observations(
            values=pd.DataFrame({".fitted": [10.0, 20.0, 40.0, 50.0]}),
            positions=[0, 1, 3, 4],
        )
        out = aligner.align(data, obs)
        assert len(out) == len(data)
        assert list(out.columns) == ["x", "g", ".fitted"]
        assert out[".fitted"].iloc[[0, 1, 3, 4]].tolist() == [10.0, 20.0, 40.0, 50.0]
        assert np.isnan(out[".fitted"].iloc[2])

    def test_input_order_preserved(self, aligner, data):
        obs = Observations(
            values=pd.DataFrame({".fitted": [50.0, 10.0]}),
            positions=[4, 0],
        )
        out = aligner.align(data, obs)
        assert out["g"].tolist() == list("abcde")
        assert out[".fitted"].iloc[0] == 10.0
        assert out[".fitted"].iloc[4] == 50.0

    def test_out_of_range_position(self, aligner, data):
        obs = Observations(values=pd.DataFrame({".fitted": [1.0]}), positions=[5])
        with pytest.raises(AlignmentError) as excinfo:
            aligner.align(data, obs)
        assert excinfo.value.n_rows == 5
        assert excinfo.value.n_observations == 1

    def test_duplicate_positions(self, aligner, data):
        obs = Observations(
            values=pd.DataFrame({".fitted": [1.0, 2.0]}), positions=[1, 1]
        )
        with pytest.raises(AlignmentError, match="duplicates"):
            aligner.align(data, obs)

    def test_position_count_mismatch(self, aligner, data):
        obs = Observations(
            values=pd.DataFrame({".fitted": [1.0, 2.0]}), positions=[1]
        )
        with pytest.raises(AlignmentError, match="positions"):
            aligner.align(data, obs)

    def test_float_positions_rejected(self, aligner, data):
        obs = Observations(values=pd.DataFrame({".fitted": [1.0]}), positions=[1.0])
        with pytest.raises(AlignmentError, match="integers"):
            aligner.align(data, obs)

    def test_no_observations(self, aligner, data):
        obs = Observations(
            values=pd.DataFrame({".fitted": np.array([], dtype=float)}),
            positions=np.array([], dtype=int),
        )
        out = aligner.align(data, obs)
        assert len(out) == 5
        assert out[".fitted"].isna().all()


class TestByLabel:
    def test_labels_matched(self, aligner):
        data = pd.DataFrame({"x": [1.0, 2.0, 3.0]}, index=["r1", "r2", "r3"])
        obs = Observations(
            values=pd.DataFrame({".fitted": [30.0, 10.0]}),
            labels=["r3", "r1"],
        )
        out = aligner.align(data, obs)
        assert out[".rownames"].tolist() == ["r1", "r2", "r3"]
        assert out[".fitted"].iloc[0] == 10.0
        assert np.isnan(out[".fitted"].iloc[1])
        assert out[".fitted"].iloc[2] == 30.0
        assert isinstance(out.index, pd.RangeIndex)

    def test_unknown_label(self, aligner, data):
        obs = Observations(values=pd.DataFrame({".fitted": [1.0]}), labels=[99])
        with pytest.raises(AlignmentError, match="not found"):
            aligner.align(data, obs)

    def test_duplicate_data_labels(self, aligner):
        data = pd.DataFrame({"x": [1.0, 2.0]}, index=[0, 0])
        obs = Observations(values=pd.DataFrame({".fitted": [1.0]}), labels=[0])
        with pytest.raises(AlignmentError, match="duplicate row labels"):
            aligner.align(data, obs)

    def test_positions_win_over_labels(self, aligner, data):
        obs = Observations(
            values=pd.DataFrame({".fitted": [1.0]}), positions=[2], labels=[99]
        )
        out = aligner.align(data, obs)
        assert out[".fitted"].iloc[2] == 1.0


class TestByOrder:
    def test_equal_length_aligned_in_order(self, aligner, data):
        obs = Observations(values=pd.DataFrame({".resid": np.arange(5.0)}))
        out = aligner.align(data, obs)
        assert out[".resid"].tolist() == [0.0, 1.0, 2.0, 3.0, 4.0]

    def test_unequal_length_without_index(self, aligner, data):
        obs = Observations(values=pd.DataFrame({".resid": np.arange(4.0)}))
        with pytest.raises(AlignmentError) as excinfo:
            aligner.align(data, obs)
        assert excinfo.value.n_rows == 5
        assert excinfo.value.n_observations == 4


class TestRownamesAndCollisions:
    def test_default_index_adds_no_rownames(self, aligner, data):
        obs = Observations(values=pd.DataFrame({".resid": np.zeros(5)}))
        assert ".rownames" not in aligner.align(data, obs).columns

    def test_shifted_range_index_keeps_rownames(self, aligner):
        data = pd.DataFrame({"x": [1.0, 2.0]}, index=pd.RangeIndex(10, 12))
        obs = Observations(values=pd.DataFrame({".resid": [0.0, 0.0]}))
        out = aligner.align(data, obs)
        assert out[".rownames"].tolist() == [10, 11]

    def test_collision_with_data_column(self, aligner):
        data = pd.DataFrame({"x": [1.0, 2.0], ".fitted": [0.0, 0.0]})
        obs = Observations(values=pd.DataFrame({".fitted": [1.0, 2.0]}))
        with pytest.raises(InputError, match=r"\.fitted"):
            aligner.align(data, obs)

    def test_data_not_mutated(self, aligner, data):
        before = data.copy()
        obs = Observations(values=pd.DataFrame({".resid": np.zeros(5)}))
        aligner.align(data, obs)
        pd.testing.assert_frame_equal(data, before)


class TestResolveInput:
    def test_precedence(self):
        data = pd.DataFrame({"x": [1]})
        newdata = pd.DataFrame({"x": [2]})
        rebuilt = pd.DataFrame({"x": [3]})
        obs = Observations(values=pd.DataFrame({".fitted": [0.0]}), data=rebuilt)

        opts = normalize_options("augment", data=data, newdata=newdata)
        assert resolve_input(opts, obs) is newdata
        opts = normalize_options("augment", data=data)
        assert resolve_input(opts, obs) is data
        opts = normalize_options("augment")
        assert resolve_input(opts, obs) is rebuilt

    def test_nothing_available(self):
        obs = Observations(values=pd.DataFrame({".fitted": [0.0]}))
        assert resolve_input(normalize_options("augment"), obs) is None
