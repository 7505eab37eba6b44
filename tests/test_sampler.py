"""
Tests for the Name Sampler
==========================
Tests for weighted draws and name construction in namechain/sampler.py.
"""

import random
import pytest
import sys
from collections import Counter
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namechain.chain import INITIAL, NAME_LEN, PARTS, TransitionModel, build_model
from namechain.errors import NoDataError
from namechain.sampler import PLACEHOLDER, NameSampler

CORPUS = [
    "Adran", "Aelar", "Aramil", "Arannis", "Beiro", "Berrian", "Carric",
    "Enialis", "Erevan", "Galinndan", "Heian", "Immeral", "Laucian",
    "Paelias", "Quarion", "Riardon", "Soveliss", "Thamior", "Varis",
    "Caelion Amakiir", "Naivor Holimion",
]


def model_from(bags: dict) -> TransitionModel:
    return TransitionModel.from_dict({"bags": bags})


class RecordingSampler(NameSampler):
    """Sampler that remembers every word length it draws."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lengths = []

    def select(self, key):
        token = super().select(key)
        if key == NAME_LEN:
            self.lengths.append(token)
        return token


class TestSelect:
    """Tests for the weighted draw helper."""

    @pytest.fixture
    def model(self):
        return build_model(CORPUS)

    def test_single_token_bag(self):
        sampler = NameSampler(model_from({"x": [["y", 3]]}), rng=random.Random(0))
        assert all(sampler.select("x") == "y" for _ in range(50))

    def test_every_weighted_token_is_drawn(self, model):
        sampler = NameSampler(model, rng=random.Random(7))
        drawn = Counter(sampler.select(INITIAL) for _ in range(5000))
        for token, weight in model[INITIAL].items():
            if weight > 0:
                assert drawn[token] > 0, f"{token!r} never drawn"

    def test_zero_weight_token_never_drawn(self):
        sampler = NameSampler(model_from({"x": [["a", 0], ["b", 1]]}),
                              rng=random.Random(3))
        assert {sampler.select("x") for _ in range(500)} == {"b"}

    def test_frequent_tokens_drawn_more_often(self):
        # weights 1 and 19 (raw counts 1 and 10)
        sampler = NameSampler(model_from({"x": [["r", 1], ["c", 19]]}),
                              rng=random.Random(11))
        drawn = Counter(sampler.select("x") for _ in range(2000))
        assert drawn["c"] > drawn["r"] * 5

    def test_missing_key_returns_placeholder(self, model):
        sampler = NameSampler(model, rng=random.Random(0))
        assert sampler.select("#") == PLACEHOLDER

    def test_missing_key_strict_raises(self, model):
        sampler = NameSampler(model, rng=random.Random(0), strict=True)
        with pytest.raises(NoDataError) as exc_info:
            sampler.select("#")
        assert exc_info.value.key == "#"

    def test_custom_placeholder(self, model):
        sampler = NameSampler(model, placeholder="?")
        assert sampler.select("#") == "?"

    @pytest.mark.parametrize("placeholder", ["", "--", None])
    def test_placeholder_must_be_single_character(self, model, placeholder):
        with pytest.raises(ValueError):
            NameSampler(model, placeholder=placeholder)


class TestGenerate:
    """Tests for name construction."""

    def test_end_to_end_example(self):
        model = build_model(["Aa", "Ab", "Ba"])
        sampler = NameSampler(model, rng=random.Random(5))
        for _ in range(200):
            name = sampler.generate()
            assert " " not in name
            assert len(name) == 2
            assert name[0] in {"A", "B"}
            assert name[1] in {"a", "b"}
            if name[0] == "B":
                assert name[1] == "a"

    def test_reproducible_with_same_seed(self):
        model = build_model(CORPUS)
        first = NameSampler(model, rng=random.Random(42))
        second = NameSampler(model, rng=random.Random(42))
        assert [first.generate() for _ in range(25)] == [second.generate() for _ in range(25)]

    def test_word_lengths_match_drawn_lengths(self):
        model = build_model(CORPUS)
        sampler = RecordingSampler(model, rng=random.Random(9))
        for _ in range(300):
            sampler.lengths.clear()
            words = sampler.generate().split(" ")
            assert [len(w) for w in words] == sampler.lengths

    def test_word_count_from_parts(self):
        model = model_from({
            PARTS: [[3, 1]],
            NAME_LEN: [[2, 1]],
            INITIAL: [["a", 1]],
            "a": [["b", 1]],
        })
        assert NameSampler(model, rng=random.Random(0)).generate() == "ab ab ab"

    def test_zero_target_length_gives_single_character(self):
        model = model_from({
            PARTS: [[1, 1]],
            NAME_LEN: [[0, 1]],
            INITIAL: [["q", 1]],
        })
        assert NameSampler(model, rng=random.Random(0)).generate() == "q"

    def test_unseen_context_embeds_placeholder(self):
        # 'q' was never observed as a predecessor
        model = model_from({
            PARTS: [[1, 1]],
            NAME_LEN: [[3, 1]],
            INITIAL: [["q", 1]],
        })
        sampler = NameSampler(model, rng=random.Random(0))
        assert sampler.generate() == "q--"

    def test_unseen_context_strict_raises(self):
        model = model_from({
            PARTS: [[1, 1]],
            NAME_LEN: [[3, 1]],
            INITIAL: [["q", 1]],
        })
        sampler = NameSampler(model, rng=random.Random(0), strict=True)
        with pytest.raises(NoDataError):
            sampler.generate()

    def test_placeholder_reachable_from_real_corpus(self):
        # 'b' only ends a word, so a 4-letter word starting 'ab' hits it
        model = build_model(["ab", "xxxx"])
        sampler = NameSampler(model, rng=random.Random(1))
        names = {sampler.generate() for _ in range(300)}
        assert "ab--" in names
        assert names <= {"ab", "xx", "ab--", "xxxx"}

    def test_empty_model_raises(self):
        sampler = NameSampler(build_model([]), rng=random.Random(0))
        with pytest.raises(NoDataError):
            sampler.generate()

    @pytest.mark.parametrize("missing", [PARTS, NAME_LEN, INITIAL])
    def test_missing_structural_bag_raises(self, missing):
        bags = {
            PARTS: [[1, 1]],
            NAME_LEN: [[2, 1]],
            INITIAL: [["a", 1]],
            "a": [["b", 1]],
        }
        del bags[missing]
        sampler = NameSampler(model_from(bags), rng=random.Random(0))
        with pytest.raises(NoDataError) as exc_info:
            sampler.generate()
        assert exc_info.value.key == missing

    def test_does_not_touch_global_random_state(self):
        model = build_model(CORPUS)
        random.seed(123)
        expected = random.random()
        random.seed(123)
        NameSampler(model, rng=random.Random(0)).generate()
        assert random.random() == expected
