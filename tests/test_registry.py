"""Tests for the adapter registry and type-tag resolution."""

import threading

import pandas as pd
import pytest

from modeltidy.exceptions import NoAdapterError
from modeltidy.registry import (
    AdapterSpec,
    TypeRegistry,
    model_type,
    qualified_name,
    register_adapter,
    registered_kinds,
    resolve_adapter,
)

# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


class Base:
    pass


class Child(Base):
    pass


class GrandChild(Child):
    pass


class Unrelated:
    pass


def _glance_base(model, options):
    return pd.DataFrame({"nobs": [1]})


def _glance_child(model, options):
    return pd.DataFrame({"nobs": [2]})


def _tidy(model, options):
    return pd.DataFrame({"term": ["a"], "estimate": [1.0]})


@pytest.fixture()
def registry():
    return TypeRegistry()


# ------------------------------------------------------------------ #
# Registration
# ------------------------------------------------------------------ #


class TestRegister:
    def test_returns_spec(self, registry):
        spec = registry.register(Base, "glance", _glance_base)
        assert isinstance(spec, AdapterSpec)
        assert spec.type_tag is Base
        assert spec.kind == "glance"
        assert spec.adapter is _glance_base
        assert (Base, "glance") in registry
        assert len(registry) == 1

    def test_unknown_kind_rejected(self, registry):
        with pytest.raises(ValueError, match="Unknown summarization kind"):
            registry.register(Base, "summary", _glance_base)

    def test_non_callable_rejected(self, registry):
        with pytest.raises(TypeError, match="not callable"):
            registry.register(Base, "glance", "not a function")

    def test_bad_type_tag_rejected(self, registry):
        with pytest.raises(TypeError, match="type_tag"):
            registry.register(42, "glance", _glance_base)
        with pytest.raises(TypeError, match="type_tag"):
            registry.register("", "glance", _glance_base)

    def test_forbidden_extra_column_rejected(self, registry):
        with pytest.raises(ValueError, match="may not appear"):
            registry.register(Base, "tidy", _tidy, extra_columns=["formula"])

    def test_schema_only_for_glance(self, registry):
        with pytest.raises(ValueError, match="glance"):
            registry.register(Base, "tidy", _tidy, columns=["term"])

    def test_schema_stored_as_frozenset(self, registry):
        spec = registry.register(Base, "glance", _glance_base, columns=("nobs", "AIC"))
        assert spec.columns == frozenset({"nobs", "AIC"})

    def test_reregistration_replaces(self, registry):
        registry.register(Base, "glance", _glance_base)
        registry.register(Base, "glance", _glance_child)
        assert registry.resolve(Base, "glance").adapter is _glance_child
        assert len(registry) == 1

    def test_unregister(self, registry):
        registry.register(Base, "glance", _glance_base)
        registry.unregister(Base, "glance")
        with pytest.raises(NoAdapterError):
            registry.resolve(Base, "glance")

    def test_unregister_missing_raises_key_error(self, registry):
        with pytest.raises(KeyError):
            registry.unregister(Base, "glance")


# ------------------------------------------------------------------ #
# Resolution
# ------------------------------------------------------------------ #


class TestResolve:
    def test_exact_class(self, registry):
        registry.register(Base, "glance", _glance_base)
        assert registry.resolve(Base, "glance").adapter is _glance_base

    def test_inherited_through_hierarchy(self, registry):
        registry.register(Base, "glance", _glance_base)
        assert registry.resolve(GrandChild, "glance").adapter is _glance_base

    def test_most_specific_wins(self, registry):
        registry.register(Base, "glance", _glance_base)
        registry.register(Child, "glance", _glance_child)
        assert registry.resolve(GrandChild, "glance").adapter is _glance_child
        assert registry.resolve(Base, "glance").adapter is _glance_base

    def test_string_tag_matches(self, registry):
        registry.register(qualified_name(Child), "glance", _glance_child)
        assert registry.resolve(GrandChild, "glance").adapter is _glance_child

    def test_string_tag_of_subclass_shadows_base_class(self, registry):
        registry.register(Base, "glance", _glance_base)
        registry.register(qualified_name(Child), "glance", _glance_child)
        assert registry.resolve(Child, "glance").adapter is _glance_child

    def test_resolve_for_uses_runtime_type(self, registry):
        registry.register(Child, "glance", _glance_child)
        assert registry.resolve_for(GrandChild(), "glance").adapter is _glance_child

    def test_missing_raises_no_adapter_error(self, registry):
        registry.register(Base, "glance", _glance_base)
        with pytest.raises(NoAdapterError) as excinfo:
            registry.resolve(Base, "augment")
        err = excinfo.value
        assert err.kind == "augment"
        assert err.type_tag is Base
        assert err.available == frozenset({"glance"})
        assert "glance" in str(err)

    def test_no_adapter_error_is_not_implemented(self, registry):
        with pytest.raises(NotImplementedError):
            registry.resolve(Unrelated, "tidy")

    def test_unknown_kind_on_resolve(self, registry):
        with pytest.raises(ValueError, match="Unknown summarization kind"):
            registry.resolve(Base, "summary")

    def test_kinds_for(self, registry):
        registry.register(Base, "glance", _glance_base)
        registry.register(Child, "tidy", _tidy)
        assert registry.kinds_for(Base) == frozenset({"glance"})
        assert registry.kinds_for(GrandChild) == frozenset({"glance", "tidy"})
        assert registry.kinds_for(Unrelated) == frozenset()


class TestExactRegistration:
    def test_exact_spec_recorded(self, registry):
        assert registry.register(Child, "glance", _glance_child, exact=True).exact
        assert not registry.register(Base, "glance", _glance_base).exact

    def test_matches_own_class(self, registry):
        registry.register(Child, "glance", _glance_child, exact=True)
        assert registry.resolve(Child, "glance").adapter is _glance_child

    def test_subclass_not_matched(self, registry):
        registry.register(Child, "glance", _glance_child, exact=True)
        with pytest.raises(NoAdapterError):
            registry.resolve(GrandChild, "glance")
        assert registry.kinds_for(GrandChild) == frozenset()

    def test_subclass_falls_through_to_ancestor(self, registry):
        registry.register(Base, "glance", _glance_base)
        registry.register(Child, "glance", _glance_child, exact=True)
        assert registry.resolve(Child, "glance").adapter is _glance_child
        assert registry.resolve(GrandChild, "glance").adapter is _glance_base

    def test_exact_string_tag(self, registry):
        registry.register(qualified_name(Child), "tidy", _tidy, exact=True)
        assert registry.kinds_for(Child) == frozenset({"tidy"})
        assert registry.kinds_for(GrandChild) == frozenset()

    def test_error_lists_only_applicable_kinds(self, registry):
        registry.register(Base, "tidy", _tidy)
        registry.register(Child, "glance", _glance_child, exact=True)
        with pytest.raises(NoAdapterError) as excinfo:
            registry.resolve(GrandChild, "glance")
        assert excinfo.value.available == frozenset({"tidy"})


class TestModelType:
    def test_plain_object_uses_own_class(self):
        assert model_type(GrandChild()) is GrandChild

    def test_statsmodels_results_are_unwrapped(self):
        import statsmodels.api as sm
        from statsmodels.regression.linear_model import OLSResults, RegressionResults

        exog = sm.add_constant([0.0, 1.0, 2.0, 3.0])
        ols = sm.OLS([1.0, 2.0, 3.5, 3.9], exog).fit()
        wls = sm.WLS([1.0, 2.0, 3.5, 3.9], exog, weights=[1.0, 2.0, 1.0, 2.0]).fit()
        assert model_type(ols) is OLSResults
        assert model_type(wls) is RegressionResults

    def test_resolve_for_sees_wrapped_class(self, registry):
        import statsmodels.api as sm
        from statsmodels.regression.linear_model import OLSResults

        registry.register(OLSResults, "glance", _glance_base, exact=True)
        res = sm.OLS([1.0, 2.0, 3.5, 3.9], sm.add_constant([0.0, 1.0, 2.0, 3.0])).fit()
        assert registry.resolve_for(res, "glance").adapter is _glance_base


class TestConcurrency:
    def test_concurrent_register_and_resolve(self, registry):
        registry.register(Base, "glance", _glance_base)
        classes = [type(f"Dyn{i}", (Base,), {}) for i in range(50)]
        errors = []

        def writer():
            for cls in classes:
                registry.register(cls, "tidy", _tidy)

        def reader():
            try:
                for _ in range(200):
                    spec = registry.resolve(GrandChild, "glance")
                    assert spec.adapter is _glance_base
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        for cls in classes:
            assert registry.resolve(cls, "tidy").adapter is _tidy


class TestDefaultRegistry:
    def test_register_and_resolve_adapter(self):
        class PluginModel:
            pass

        register_adapter(PluginModel, "glance", _glance_base)
        spec = resolve_adapter(PluginModel(), "glance")
        assert spec.adapter is _glance_base
        assert registered_kinds(PluginModel()) == frozenset({"glance"})

    def test_builtins_registered_on_import(self):
        import statsmodels.api as sm

        import modeltidy  # noqa: F401

        res = sm.OLS([1.0, 2.0, 3.5, 3.9], sm.add_constant([0.0, 1.0, 2.0, 3.0])).fit()
        assert registered_kinds(res) == frozenset({"glance", "tidy", "augment"})
