import logging

from bs4 import BeautifulSoup

from contentfinder.assembler import bottom_up_search, count_combinations, sorted_combinations
from contentfinder.finder import prepare_context
from contentfinder.models import Candidate
from contentfinder.optimizer import optimize, reductions
from contentfinder.oracle import build_query, penalty, resolves_to

HTML = """
<html><body>
  <main>
    <ul>
      <li><span>same</span></li>
      <li><span>same</span></li>
      <li><span>different</span></li>
    </ul>
  </main>
  <aside><span>same</span></aside>
</body></html>
"""


def _soup() -> BeautifulSoup:
    return BeautifulSoup(HTML, "html.parser")


def _c(name: str, penalty_value: float, level: int = 0) -> Candidate:
    return Candidate(name=name, content=None, penalty=penalty_value, level=level)


def test_combinations_vary_farthest_level_fastest() -> None:
    stack = [[_c("a", 1), _c("b", 1)], [_c("x", 1, 1), _c("y", 1, 1)]]
    order = [tuple(candidate.name for candidate in path) for path in sorted_combinations(stack)]
    assert order == [("a", "x"), ("a", "y"), ("b", "x"), ("b", "y")]


def test_combinations_are_sorted_by_penalty() -> None:
    stack = [[_c("span", 2), _c("span:nth-child(1)", 3)], [_c("li", 2, 1), _c("li:nth-child(2)", 3, 1)]]
    paths = sorted_combinations(stack)
    assert [penalty(path) for path in paths] == [4, 5, 5, 6]
    assert [build_query(path) for path in paths[1:3]] == [
        "li:nth-child(2) > span",
        "li > span:nth-child(1)",
    ]


def test_count_combinations() -> None:
    assert count_combinations([[_c("a", 1)] * 3, [_c("b", 1)] * 4, [_c("c", 1)]]) == 12


def test_bottom_up_search_stops_at_first_unique_level() -> None:
    soup = _soup()
    target = soup.select("li span")[1]
    ctx = prepare_context(target)

    path = bottom_up_search(ctx, "all")

    assert path is not None
    assert build_query(path) == "li:nth-child(2) > span"
    assert resolves_to(path, ctx)


def test_bottom_up_search_gives_up_when_threshold_is_exceeded(caplog) -> None:
    soup = _soup()
    ctx = prepare_context(soup.select("li span")[1], {"threshold": 1})

    with caplog.at_level(logging.DEBUG, logger="contentfinder.search"):
        assert bottom_up_search(ctx, "all") is None
        assert bottom_up_search(ctx, "single_nth") is None
        path = bottom_up_search(ctx, "nth_only")

    assert path is not None
    assert all(":nth-child(" in candidate.name for candidate in path)
    assert resolves_to(path, ctx)
    assert "exceed threshold 1" in caplog.text


def test_final_attempt_uses_the_whole_stack() -> None:
    soup = _soup()
    target = soup.select("li span")[0]
    ctx = prepare_context(target, {"seed_min_length": 10})

    path = bottom_up_search(ctx, "all")

    assert path is not None
    assert len(path) == 5
    assert resolves_to(path, ctx)


def test_optimizer_never_lengthens_and_keeps_identity() -> None:
    soup = _soup()
    target = soup.select("li span")[0]
    ctx = prepare_context(target, {"seed_min_length": 10})
    path = bottom_up_search(ctx, "all")
    assert path is not None

    for reduction in reductions(path, ctx):
        assert len(reduction) < len(path)
        assert resolves_to(reduction, ctx)

    best = optimize(path, ctx)
    assert len(best) <= len(path)
    assert penalty(best) <= penalty(path)
    assert resolves_to(best, ctx)
    assert best[0].level == 0
    assert best[-1].level == path[-1].level


def test_optimizer_collects_every_reduction() -> None:
    soup = _soup()
    target = soup.select("li span")[2]
    ctx = prepare_context(target)
    path = (
        Candidate(name="span", content="different", penalty=2, level=0),
        Candidate(name="li", content="different", penalty=2, level=1),
        Candidate(name="ul", content=None, penalty=2, level=2),
        Candidate(name="main", content=None, penalty=2, level=3),
    )

    found = [build_query(item) for item in reductions(path, ctx)]

    assert found == ["main > ul span", "main span", "main li > span"]
    assert build_query(optimize(path, ctx)) == "main span"


def test_optimizer_respects_minimum_length() -> None:
    soup = _soup()
    target = soup.select("li span")[2]
    ctx = prepare_context(target, {"optimized_min_length": 4})
    path = (
        Candidate(name="span", content="different", penalty=2, level=0),
        Candidate(name="li", content=None, penalty=2, level=1),
        Candidate(name="ul", content=None, penalty=2, level=2),
        Candidate(name="main", content=None, penalty=2, level=3),
    )

    assert reductions(path, ctx) == []
    assert optimize(path, ctx) == path
