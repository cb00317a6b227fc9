"""Tests for hlalign.alignment.chain.StrategyChain."""

from hlalign.alignment.chain import DEFAULT_STRATEGIES, StrategyChain
from hlalign.alignment.strategies import ExactStrategy
from hlalign.types import HighlightRecord, MatchType


def _rec(text, rid="r1"):
    return HighlightRecord(id=rid, text=text)


class TestStrategyOrder:
    def test_default_order(self):
        chain = StrategyChain()
        assert [s.match_type for s in chain.strategies] == [
            MatchType.EXACT,
            MatchType.NORMALIZED,
            MatchType.CASE_INSENSITIVE,
            MatchType.CONTEXT_BASED,
            MatchType.FLEXIBLE,
            MatchType.FUZZY,
            MatchType.KEYWORD_EXPANDED,
        ]
        assert [s.priority for s in chain.strategies] == [1, 2, 3, 4, 4, 6, 7]
        assert len(DEFAULT_STRATEGIES) == 7

    def test_custom_strategy_list(self):
        chain = StrategyChain([ExactStrategy()])
        assert chain.match("ACT NOW", _rec("act now")) == []


class TestMatch:
    def test_exact_match_offsets(self):
        source = "We need to move fast, act now before the offer expires."
        snippet = "act now before the offer expires"
        cands = StrategyChain().match(source, _rec(snippet))
        assert len(cands) == 1
        c = cands[0]
        assert c.match_type == MatchType.EXACT
        assert c.priority == 1
        assert source[c.start:c.end] == snippet
        assert c.start == source.index(snippet)

    def test_stops_at_first_strategy_with_results(self):
        source = "no deal, No Deal, no deal"
        cands = StrategyChain().match(source, _rec("no deal"))
        assert [c.match_type for c in cands] == [MatchType.EXACT, MatchType.EXACT]

    def test_normalized_fires_after_exact_fails(self):
        source = "This  is   a  test."
        (c,) = StrategyChain().match(source, _rec("This is a test"))
        assert c.match_type == MatchType.NORMALIZED
        assert source[c.start:c.end] == "This  is   a  test"

    def test_ukrainian_exact(self):
        source = "Ми повинні підписати договір сьогодні, інакше знижка зникне."
        snippet = "інакше знижка зникне"
        (c,) = StrategyChain().match(source, _rec(snippet))
        assert c.match_type == MatchType.EXACT
        assert source[c.start:c.end] == snippet

    def test_fuzzy_for_single_substitution(self):
        source = "we will not accept these terms unless the price drops."
        (c, *_) = StrategyChain().match(source, _rec("we will not accept those terms"))
        assert c.match_type == MatchType.FUZZY
        assert c.priority == 6
        assert c.similarity >= 0.75

    def test_context_based(self):
        source = "Please ACT NOW, the price rises."
        (c,) = StrategyChain().match(source, _rec("act  now,"))
        assert c.match_type == MatchType.CONTEXT_BASED
        assert source[c.start:c.end] == "ACT NOW,"

    def test_flexible(self):
        source = "Well, we can't; go lower!"
        (c,) = StrategyChain().match(source, _rec("We cant go lower"))
        assert c.match_type == MatchType.FLEXIBLE
        assert source[c.start:c.end] == "we can't; go lower"

    def test_order_is_attached(self):
        cands = StrategyChain().match("act now", _rec("act now"), order=3)
        assert cands[0].order == 3

    def test_empty_and_whitespace_snippets(self):
        chain = StrategyChain()
        assert chain.match("some text", _rec("")) == []
        assert chain.match("some text", _rec("   \n")) == []

    def test_no_match(self):
        assert StrategyChain().match("abc def", _rec("zzzz yyyy qqqq")) == []

    def test_regex_metacharacters_in_snippet(self):
        source = "The price (final) is $100 + tax."
        cands = StrategyChain().match(source, _rec("price (FINAL) is $100 + tax"))
        assert cands
        c = cands[0]
        assert c.match_type == MatchType.CASE_INSENSITIVE
        assert source[c.start:c.end] == "price (final) is $100 + tax"


class TestMatchAll:
    def test_candidates_for_every_record_in_order(self):
        source = "close today or lose the deal"
        recs = [_rec("close today", "a"), _rec("the deal", "b")]
        cands = StrategyChain().match_all(source, recs)
        assert [(c.record_id, c.order) for c in cands] == [("a", 0), ("b", 1)]
