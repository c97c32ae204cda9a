"""Name normalization tests."""

from __future__ import annotations

from poi_extractor.domain.normalizer import contains_phrase, fold, name_tokens, names_match, normalize


def test_normalize_strips_vietnamese_marks():
    assert normalize("Chùa Một Cột") == "chua mot cot"
    assert normalize("Đà Nẵng") == "da nang"


def test_normalize_maps_ligatures_and_punctuation():
    assert normalize("Sacré-Cœur") == "sacre coeur"
    assert normalize("  Eiffel   Tower!! ") == "eiffel tower"


def test_fold_keeps_punctuation():
    assert fold("Senso-ji") == "senso-ji"


def test_name_tokens_and_contains_phrase():
    tokens = name_tokens("Imperial City (Dai Noi)")
    assert tokens == ("imperial", "city", "dai", "noi")
    assert contains_phrase(tokens, ("city", "dai"))
    assert not contains_phrase(tokens, ("city", "noi"))
    assert not contains_phrase(tokens, ())


def test_names_match_contained_name():
    assert names_match("Eiffel Tower", "the Eiffel Tower")
    assert names_match("Café Giảng", "cafe giang")


def test_names_match_rejects_partial_words_and_siblings():
    assert not names_match("Tower", "Towering Heights")
    assert not names_match("Notre Dame Cathedral", "Notre Dame Basilica")
    assert not names_match("", "Louvre")
