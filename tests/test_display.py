"""Tests for the display module."""

import numpy as np
import pandas as pd

from modeltidy.display import (
    _fmt_p,
    _fmt_val,
    _truncate,
    print_glance_table,
    print_tidy_table,
)


class TestTruncate:
    def test_short_name_unchanged(self):
        assert _truncate("abc", 10) == "abc"

    def test_exact_length_unchanged(self):
        assert _truncate("abcdefghij", 10) == "abcdefghij"

    def test_long_name_truncated(self):
        result = _truncate("abcdefghijk", 10)
        assert len(result) == 10
        assert result.endswith("...")


class TestFormatting:
    def test_p_values(self):
        assert _fmt_p(0.5) == "0.5000"
        assert _fmt_p(1e-8) == "1.00e-08"
        assert _fmt_p(float("nan")) == "N/A"

    def test_values(self):
        assert _fmt_val(None) == "N/A"
        assert _fmt_val(True) == "Yes"
        assert _fmt_val(12) == "12"
        assert _fmt_val(3.0) == "3"
        assert _fmt_val(0.25) == "0.2500"
        assert _fmt_val(float("nan")) == "N/A"
        assert _fmt_val("REML") == "REML"


class TestPrintTables:
    @staticmethod
    def _tidy_table():
        return pd.DataFrame(
            {
                "term": ["Intercept", "a_very_long_predictor_name_indeed"],
                "estimate": [1.5, -0.25],
                "std.error": [0.1, 0.05],
                "statistic": [15.0, -5.0],
                "p.value": [1e-12, 0.0004],
            }
        )

    @staticmethod
    def _glance_table():
        return pd.DataFrame(
            {
                "r.squared": [0.85],
                "AIC": [150.0],
                "converged": [np.bool_(True)],
                "nobs": [100],
            }
        )

    def test_tidy_prints_terms(self, capsys):
        print_tidy_table(self._tidy_table())
        out = capsys.readouterr().out
        assert "Model Summary" in out
        assert "Intercept" in out
        assert "p.value" in out
        assert "1.00e-12" in out
        assert all(len(line) <= 80 for line in out.splitlines())

    def test_tidy_with_glance_panel(self, capsys):
        print_tidy_table(self._tidy_table(), glance_table=self._glance_table(), title="OLS")
        out = capsys.readouterr().out
        assert "OLS" in out
        assert "r.squared:" in out
        assert "Yes" in out

    def test_glance_prints_statistics(self, capsys):
        print_glance_table(self._glance_table())
        out = capsys.readouterr().out
        assert "Model Statistics" in out
        assert "nobs:" in out
        assert "100" in out
