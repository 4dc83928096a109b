"""Tests for the column naming conventions."""

import pytest

from modeltidy.columns import (
    AUGMENT,
    GLANCE,
    IDENTIFIER_COLUMNS,
    KINDS,
    ROWNAMES,
    TIDY,
    canonical_order,
    column_info,
    is_recognized,
    is_reserved,
    order_columns,
)


class TestReservedPrefix:
    def test_dot_prefix_is_reserved(self):
        assert is_reserved(".fitted")
        assert is_reserved(".my_extra")

    def test_plain_names_are_not_reserved(self):
        assert not is_reserved("fitted")
        assert not is_reserved("x.1")

    def test_non_string_is_not_reserved(self):
        assert not is_reserved(0)

    def test_rownames_is_reserved(self):
        assert is_reserved(ROWNAMES)


class TestVocabulary:
    @pytest.mark.parametrize(
        "name", ["term", "estimate", "std.error", "p.value", "AIC", "logLik", "nobs"]
    )
    def test_conventional_names_recognized(self, name):
        assert is_recognized(name)

    def test_reserved_names_recognized(self):
        assert is_recognized(".anything")

    def test_unknown_name_not_recognized(self):
        assert not is_recognized("coef")
        assert not is_recognized("rsquared")

    def test_column_info(self):
        info = column_info("p.value")
        assert info is not None
        assert info.dtype == "numeric"
        assert column_info("converged").dtype == "boolean"
        assert column_info("nonexistent") is None

    def test_identifiers_are_in_vocabulary(self):
        for name in IDENTIFIER_COLUMNS:
            assert is_recognized(name)


class TestCanonicalOrder:
    def test_every_kind_has_an_order(self):
        for kind in KINDS:
            assert canonical_order(kind)

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="Unknown summarization kind"):
            canonical_order("summary")

    def test_tidy_order(self):
        cols = ["p.value", "estimate", "term", "std.error"]
        assert order_columns(cols, TIDY) == ["term", "estimate", "std.error", "p.value"]

    def test_extras_follow_in_original_order(self):
        cols = ["zeta", "estimate", "alpha", "term"]
        assert order_columns(cols, TIDY) == ["term", "estimate", "zeta", "alpha"]

    def test_glance_order(self):
        cols = ["nobs", "AIC", "r.squared"]
        assert order_columns(cols, GLANCE) == ["r.squared", "AIC", "nobs"]

    def test_augment_rownames_first(self):
        cols = [".resid", ".fitted", ROWNAMES]
        assert order_columns(cols, AUGMENT) == [ROWNAMES, ".fitted", ".resid"]
