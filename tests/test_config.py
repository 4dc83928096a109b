"""Tests for the confidence-level configuration system."""

import logging
import os

import pytest

from modeltidy._config import get_conf_level, set_conf_level


class TestGetConfLevel:
    """Tests for get_conf_level() resolution order."""

    def setup_method(self):
        """Reset state before each test."""
        import modeltidy._config as _cfg
        _cfg._conf_level_override = None
        os.environ.pop("MODELTIDY_CONF_LEVEL", None)

    def teardown_method(self):
        """Reset state after each test."""
        import modeltidy._config as _cfg
        _cfg._conf_level_override = None
        os.environ.pop("MODELTIDY_CONF_LEVEL", None)

    def test_builtin_default(self):
        assert get_conf_level() == 0.95

    def test_env_var_overrides_default(self):
        os.environ["MODELTIDY_CONF_LEVEL"] = "0.9"
        assert get_conf_level() == 0.9

    def test_env_var_whitespace_tolerated(self):
        os.environ["MODELTIDY_CONF_LEVEL"] = " 0.99 "
        assert get_conf_level() == 0.99

    def test_invalid_env_var_ignored(self, caplog):
        os.environ["MODELTIDY_CONF_LEVEL"] = "ninety"
        with caplog.at_level(logging.WARNING, logger="modeltidy._config"):
            assert get_conf_level() == 0.95
        assert "MODELTIDY_CONF_LEVEL" in caplog.text

    def test_out_of_range_env_var_ignored(self):
        os.environ["MODELTIDY_CONF_LEVEL"] = "95"
        assert get_conf_level() == 0.95

    def test_programmatic_override_wins_over_env(self):
        os.environ["MODELTIDY_CONF_LEVEL"] = "0.9"
        set_conf_level(0.8)
        assert get_conf_level() == 0.8

    def test_auto_restores_default(self):
        set_conf_level(0.8)
        assert get_conf_level() == 0.8
        set_conf_level("auto")
        assert get_conf_level() == 0.95

    def test_none_restores_default(self):
        set_conf_level(0.8)
        set_conf_level(None)
        assert get_conf_level() == 0.95


class TestSetConfLevel:
    """Tests for set_conf_level() validation."""

    def setup_method(self):
        import modeltidy._config as _cfg
        _cfg._conf_level_override = None

    def teardown_method(self):
        import modeltidy._config as _cfg
        _cfg._conf_level_override = None

    def test_accepts_valid_levels(self):
        for level in (0.5, 0.9, 0.999):
            set_conf_level(level)  # should not raise

    def test_case_insensitive_auto(self):
        set_conf_level("AUTO")
        assert get_conf_level() == 0.95

    @pytest.mark.parametrize("level", [0, 1, 1.5, -0.1])
    def test_rejects_out_of_range(self, level):
        with pytest.raises(ValueError, match="strictly between 0 and 1"):
            set_conf_level(level)

    @pytest.mark.parametrize("level", ["high", True, [0.9]])
    def test_rejects_invalid_value(self, level):
        with pytest.raises(ValueError, match="Unknown confidence level"):
            set_conf_level(level)


class TestConfLevelIntegration:
    """The configured level reaches tidy() output."""

    def setup_method(self):
        import modeltidy._config as _cfg
        _cfg._conf_level_override = None

    def teardown_method(self):
        import modeltidy._config as _cfg
        _cfg._conf_level_override = None

    def test_tidy_uses_configured_level(self):
        import numpy as np
        import statsmodels.api as sm

        from modeltidy import tidy

        rng = np.random.default_rng(0)
        x = rng.standard_normal(50)
        y = 1.0 + 2.0 * x + rng.standard_normal(50)
        res = sm.OLS(y, sm.add_constant(x)).fit()

        wide = tidy(res, conf_int=True)
        set_conf_level(0.5)
        narrow = tidy(res, conf_int=True)
        assert (narrow["conf.high"] - narrow["conf.low"] < wide["conf.high"] - wide["conf.low"]).all()
