import pytest
from bs4 import BeautifulSoup

from contentfinder.errors import InternalInvariantError
from contentfinder.finder import prepare_context
from contentfinder.models import Candidate
from contentfinder.oracle import build_query, check, locate, penalty, resolves_to

HTML = """
<html><body>
  <ul>
    <li><b>one</b><span>same</span></li>
    <li><b>two</b><span>same</span></li>
    <li><b>three</b><span>other</span></li>
  </ul>
  <ol>
    <li><span>x</span><span>x</span></li>
  </ol>
</body></html>
"""


def _soup() -> BeautifulSoup:
    return BeautifulSoup(HTML, "html.parser")


def _candidate(name: str, level: int, content: str | None = None, penalty_value: float = 2.0) -> Candidate:
    return Candidate(name=name, content=content, penalty=penalty_value, level=level)


def test_build_query_uses_child_combinator_for_adjacent_levels() -> None:
    path = (_candidate("span", 0), _candidate("li", 1), _candidate("ul", 2))
    assert build_query(path) == "ul > li > span"


def test_build_query_uses_descendant_combinator_for_gaps() -> None:
    path = (_candidate("span", 0), _candidate("ul", 2), _candidate("body", 3))
    assert build_query(path) == "body > ul span"


def test_penalty_sums_candidates() -> None:
    path = (_candidate("span", 0, penalty_value=2), _candidate(".a", 1, penalty_value=1), _candidate("#x", 2, penalty_value=0))
    assert penalty(path) == 3


def test_single_match_is_unique_without_content() -> None:
    soup = _soup()
    ctx = prepare_context(soup.ul)
    path = (_candidate("ul", 0, soup.ul.get_text()),)

    verified = check(path, ctx)

    assert verified == path
    assert not verified[0].content_unique


def test_own_content_marks_nearest_fragment() -> None:
    soup = _soup()
    target = soup.select("ul span")[2]
    ctx = prepare_context(target)

    verified = check((_candidate("span", 0, "other"),), ctx)

    assert verified is not None
    assert verified[0].content_unique
    assert resolves_to(verified, ctx)


def test_ancestor_content_marks_ancestor_fragment() -> None:
    soup = _soup()
    target = soup.select("ul span")[1]
    ancestor = soup.select("ul li")[1]
    ctx = prepare_context(target)
    path = (_candidate("span", 0, "same"), _candidate("li", 1, ancestor.get_text()))

    verified = check(path, ctx)

    assert verified is not None
    assert not verified[0].content_unique
    assert verified[1].content_unique
    assert locate(verified, ctx) == [target]


def test_ancestor_needs_exactly_one_matching_descendant() -> None:
    soup = _soup()
    target = soup.select("ol span")[0]
    ctx = prepare_context(target)
    path = (_candidate("span", 0, "x"), _candidate("li", 1, "xx"))

    assert check(path, ctx) is None


def test_ambiguous_path_is_rejected() -> None:
    soup = _soup()
    target = soup.select("ul span")[0]
    ctx = prepare_context(target)

    assert check((_candidate("span", 0, "same"),), ctx) is None


def test_input_candidates_are_not_mutated() -> None:
    soup = _soup()
    target = soup.select("ul span")[2]
    ctx = prepare_context(target)
    candidate = _candidate("span", 0, "other")

    verified = check((candidate,), ctx)

    assert verified is not None and verified[0].content_unique
    assert candidate.content_unique is False


def test_zero_matches_is_an_invariant_violation() -> None:
    soup = _soup()
    ctx = prepare_context(soup.select("span")[0])
    with pytest.raises(InternalInvariantError):
        check((_candidate("video", 0),), ctx)


def test_locate_without_marks_returns_structural_matches() -> None:
    soup = _soup()
    ctx = prepare_context(soup.select("span")[0])
    assert len(locate((_candidate("span", 0, "same"),), ctx)) == 5
    assert not resolves_to((_candidate("span", 0, "same"),), ctx)
