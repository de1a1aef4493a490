"""Tests for fuzzy scoring, field weighting and the ranking pipeline."""

from __future__ import annotations

import pytest

from falgen.core.models import CatalogItem
from falgen.core.search import (
    MAX_RESULTS,
    NO_MATCHES,
    SUBSEQUENCE_CEILING,
    SearchConfig,
    fuzzy_score,
    rank,
    score_item,
    to_options,
)

FLUX_DEV = CatalogItem("fal-ai/flux/dev", "FLUX.1 [dev]", "text-to-image", "High quality")
RECRAFT = CatalogItem("fal-ai/recraft-v3", "Recraft V3", "text-to-image", "Vector art")
KLING = CatalogItem(
    "fal-ai/kling-video/v1.6/pro/text-to-video", "Kling 1.6", "text-to-video", "Video"
)
OBSCURE = CatalogItem("acme/obscure", "Obscure Model", "text-to-image", "Niche")


def test_fuzzy_score_ladder_values() -> None:
    assert fuzzy_score("flux", "FLUX") == 1000
    assert fuzzy_score("flux", "flux.1 [dev]") == pytest.approx(500 + 4 / 12 * 100)
    assert fuzzy_score("dev", "flux-dev") == pytest.approx(300 + 3 / 8 * 50)
    assert fuzzy_score("dev", "flux dev") == pytest.approx(300 + 3 / 8 * 50)
    assert fuzzy_score("lux", "flux") == pytest.approx(200 + 3 / 4 * 50)


def test_fuzzy_score_subsequence_bonuses() -> None:
    # f at start (5 + 15), d scattered after "[" (5)
    assert fuzzy_score("fd", "FLUX.1 [dev]") == 25
    # a (20), b adjacent run 1 (15), d after a gap (5)
    assert fuzzy_score("abd", "abcd") == 40
    # a (20), b run 1 (15), c run 2 (20), e after a gap (5)
    assert fuzzy_score("abce", "abcxe") == 60
    # slash counts as a segment boundary
    assert fuzzy_score("fd", "f/d") == 40


def test_fuzzy_score_non_match_and_empty() -> None:
    assert fuzzy_score("zz", "flux") == 0
    assert fuzzy_score("xulf", "flux") == 0
    assert fuzzy_score("", "flux") == 0
    assert fuzzy_score("flux", "") == 0
    assert fuzzy_score("flux", None) == 0


def test_exact_beats_prefix_beats_scattered() -> None:
    target = "Kling Pro"
    exact = fuzzy_score(target, target)
    prefix = fuzzy_score(target, target + "x")
    scattered = fuzzy_score(target, "k-l-i-n-g- -p-r-o and more words here")
    assert exact > prefix > scattered > 0


def test_tiers_are_monotonic_for_long_queries() -> None:
    q = "abcdefghij"
    scattered = fuzzy_score(q, "a-b-c-d-e-f-g-h-i-j")
    assert scattered == SUBSEQUENCE_CEILING

    substring = fuzzy_score(q, "x" + q)
    boundary = fuzzy_score(q, "x " + q)
    prefix = fuzzy_score(q, q + "x")
    exact = fuzzy_score(q, q)
    assert exact > prefix > boundary > substring > scattered > 0


def test_score_item_weights_every_field() -> None:
    item = CatalogItem("flux", "flux", "flux", "flux", ("photo", "flux"))
    assert score_item(item, "flux") == pytest.approx(1000 * (3.0 + 2.0 + 1.5 + 0.5 + 1.2))


def test_score_item_uses_only_best_tag() -> None:
    one = CatalogItem("x/1", "Model", "other", "", ("anime",))
    many = CatalogItem("x/2", "Model", "other", "", ("anime", "anim", "animation"))
    assert score_item(one, "anime") == score_item(many, "anime")


def test_score_item_tolerates_missing_fields() -> None:
    assert score_item({"id": "fal-ai/flux", "title": None}, "flux") > 0
    assert score_item({"tags": None}, "flux") == 0

    class Bare:
        title = "Flux"

    assert score_item(Bare(), "flux") == pytest.approx(1000 * 3.0)


def test_score_item_empty_query_is_zero() -> None:
    assert score_item(FLUX_DEV, "   ") == 0


def test_scenario_flux_query_filters_unrelated_models() -> None:
    results = rank([RECRAFT, FLUX_DEV, KLING], "flux")

    assert [m.item.title for m in results] == ["FLUX.1 [dev]"]
    assert results[0].score > 0


def test_scenario_scattered_query_scores_below_prefix() -> None:
    scattered = score_item(FLUX_DEV, "fd")
    assert fuzzy_score("fd", FLUX_DEV.title) > 0
    assert scattered < score_item(FLUX_DEV, "flux")


def test_scenario_empty_catalog() -> None:
    results = rank([], "anything")

    assert results == []
    assert to_options(results) == [NO_MATCHES]
    assert not to_options(results)[0].selectable


def test_scenario_empty_query_puts_popular_first() -> None:
    results = rank([OBSCURE, FLUX_DEV], "")

    assert [m.item.title for m in results] == ["FLUX.1 [dev]", "Obscure Model"]
    assert [m.score for m in results] == [100, 0]


def test_whitespace_query_uses_default_view() -> None:
    assert rank([OBSCURE, FLUX_DEV], "   ") == rank([OBSCURE, FLUX_DEV], "")


def test_empty_query_ignores_fuzzy_scoring() -> None:
    # "Obscure Model" would fuzzy-match many things; only the title predicate counts
    cfg = SearchConfig(popular_terms=("recraft",), popular_boost=5)
    results = rank([OBSCURE, FLUX_DEV, RECRAFT], "", cfg)

    assert [m.item.id for m in results] == [RECRAFT.id, OBSCURE.id, FLUX_DEV.id]
    assert results[0].score == 5


def test_equal_scores_keep_catalog_order() -> None:
    a = CatalogItem("a/1", "Flux Alpha", "text-to-image")
    b = CatalogItem("b/2", "Flux Alpha", "text-to-image")

    assert [m.item.id for m in rank([a, b], "alpha")] == ["a/1", "b/2"]
    assert [m.item.id for m in rank([b, a], "alpha")] == ["b/2", "a/1"]


def test_results_are_capped() -> None:
    catalog = [CatalogItem(f"x/{i}", f"Flux {i}") for i in range(250)]

    assert len(rank(catalog, "flux")) == MAX_RESULTS
    assert len(rank(catalog, "")) == MAX_RESULTS


def test_non_matching_items_are_excluded() -> None:
    results = rank([OBSCURE, RECRAFT, KLING], "zzz")
    assert results == []


def test_results_sorted_by_score_descending() -> None:
    catalog = [
        CatalogItem("x/a", "Something about flux", "text-to-image"),
        CatalogItem("x/b", "Flux", "text-to-image"),
        CatalogItem("x/c", "Fancy Lux", "text-to-image"),
    ]
    scores = [m.score for m in rank(catalog, "flux")]

    assert scores == sorted(scores, reverse=True)
    assert rank(catalog, "flux")[0].item.id == "x/b"


def test_to_options_projects_and_truncates() -> None:
    item = CatalogItem("fal-ai/veo2", "Veo 2", "text-to-video", "Google video " * 10)
    [opt] = to_options(rank([item], "veo"))

    assert opt.name == "Veo 2"
    assert opt.value == "fal-ai/veo2"
    assert opt.description.startswith("[text-to-video] Google video")
    assert len(opt.description) == 50
    assert opt.selectable


def test_search_config_from_cfg() -> None:
    assert SearchConfig.from_cfg({}).popular_terms == ("flux", "veo", "kling", "wan", "stable")
    assert SearchConfig.from_cfg({"popularTerms": ["Veo"]}).popular_terms == ("veo",)
    assert SearchConfig.from_cfg({"popular_terms": "a, B,,"}).popular_terms == ("a", "b")
    assert SearchConfig.from_cfg({"popular_boost": "oops"}).popular_boost == 100
    assert SearchConfig.from_cfg({"popular_boost": 7}).popular_boost == 7


def test_empty_query_tolerates_non_string_titles() -> None:
    catalog = [{"id": "x/1", "title": 123}, {"id": "x/2", "title": "Flux"}, {"id": "x/3"}]

    results = rank(catalog, "")

    assert [m.item["id"] for m in results] == ["x/2", "x/1", "x/3"]
    assert [m.score for m in results] == [100, 0, 0]
    assert score_item(catalog[0], "flux") == 0


def test_to_options_tolerates_non_string_fields() -> None:
    [opt] = to_options(rank([{"id": "x/1", "title": 123, "category": None}], ""))

    assert opt.name == "x/1"
    assert opt.value == "x/1"
    assert opt.description == "[] "


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (["flux", 7, None, " Veo "], ("flux", "veo")),
        (5, ("flux", "veo", "kling", "wan", "stable")),
        ({"flux": True}, ("flux", "veo", "kling", "wan", "stable")),
        (None, ("flux", "veo", "kling", "wan", "stable")),
        ([], ()),
    ],
)
def test_search_config_ignores_malformed_terms(raw, expected) -> None:
    assert SearchConfig.from_cfg({"popular_terms": raw}).popular_terms == expected
