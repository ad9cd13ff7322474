"""Tests for classification selection."""

import pytest

from cosmogen.core.errors import UnknownClassification
from cosmogen.generation.rng import MinimalStandardRandom
from cosmogen.registry.selector import resolve, select_random


def _with_discoverability(definition, value):
    return definition.model_copy(update={"discoverability": value})


class TestSelectRandom:
    """Weighted-rejection selection."""

    def test_empty_candidates(self):
        with pytest.raises(ValueError):
            select_random([], MinimalStandardRandom(1))

    def test_always_kept_candidate(self, registry):
        candidate = _with_discoverability(registry.get("kerr"), 1.0)
        rng = MinimalStandardRandom(1)
        assert select_random([candidate], rng) is candidate
        # One rejection draw per candidate, one pick among the kept
        assert rng.draws == 2

    def test_fallback_when_all_rejected(self, registry):
        candidates = [
            _with_discoverability(registry.get(key), 0.0)
            for key in ("kerr", "schwarzschild", "supermassive")
        ]
        rng = MinimalStandardRandom(5)
        assert select_random(candidates, rng) in candidates
        assert rng.draws == len(candidates) + 1

    def test_rejected_candidate_never_picked(self, registry):
        kept = _with_discoverability(registry.get("kerr"), 1.0)
        rejected = _with_discoverability(registry.get("schwarzschild"), 0.0)
        for seed in range(1, 30):
            assert select_random([rejected, kept], MinimalStandardRandom(seed)) is kept

    def test_reproducible(self, registry):
        candidates = registry.definitions()
        picks_a = [select_random(candidates, MinimalStandardRandom(s)).key for s in range(20)]
        picks_b = [select_random(candidates, MinimalStandardRandom(s)).key for s in range(20)]
        assert picks_a == picks_b


class TestResolve:
    def test_explicit_key_consumes_no_draws(self, registry):
        rng = MinimalStandardRandom(1)
        assert resolve("kerr", rng, registry).key == "kerr"
        assert rng.draws == 0

    def test_unknown_key(self, registry):
        with pytest.raises(UnknownClassification):
            resolve("not_a_class", MinimalStandardRandom(1), registry)

    def test_key_outside_domain(self, registry):
        with pytest.raises(UnknownClassification):
            resolve("kerr", MinimalStandardRandom(1), registry, "star")

    @pytest.mark.parametrize("domain", ["black_hole", "galaxy", "star"])
    def test_random_pick_within_domain(self, registry, domain):
        for seed in range(10):
            assert resolve(None, MinimalStandardRandom(seed), registry, domain).domain == domain

    def test_random_pick_any_domain(self, registry):
        assert resolve(None, MinimalStandardRandom(3), registry).key in registry
