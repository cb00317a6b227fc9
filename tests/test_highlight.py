"""Tests for hlalign.report.highlight (rendering)."""

from hlalign.alignment.overlap import resolve
from hlalign.report.highlight import (
    AnnotatedOutput,
    HighlightNode,
    TextSegment,
    category_class,
    make_snippets,
    render,
)
from hlalign.types import AcceptedSpan, Category, HighlightRecord, MatchCandidate, MatchType


def _span(start, end, rid, mt=MatchType.EXACT):
    return resolve([MatchCandidate(start=start, end=end, record_id=rid, match_type=mt, priority=1)])[0]


class TestCategoryClass:
    def test_mapping(self):
        assert category_class(Category.MANIPULATION) == "manipulation"
        assert category_class(Category.COGNITIVE_BIAS) == "cognitive_bias"
        assert category_class(Category.RHETORICAL_FALLACY) == "fallacy"
        assert category_class(Category.LOGICAL_FALLACY) == "fallacy"

    def test_default(self):
        assert category_class(None) == "manipulation"


class TestRender:
    def test_reconstructs_source(self):
        source = "We need to move fast, act now before the offer expires."
        rec = HighlightRecord(id="r1", text="act now")
        out = render(source, [_span(22, 29, "r1")], [rec])
        assert out.plain_text() == source
        assert isinstance(out.nodes[0], TextSegment)
        assert isinstance(out.nodes[1], HighlightNode)
        assert out.nodes[1].text == "act now"

    def test_node_uses_source_slice_not_snippet(self):
        source = "Please ACT NOW."
        rec = HighlightRecord(id="r1", text="act now")
        out = render(source, [_span(7, 14, "r1", MatchType.CASE_INSENSITIVE)], [rec])
        assert out.highlights[0].text == "ACT NOW"

    def test_gap_text_is_escaped(self):
        source = "a < b & act now"
        rec = HighlightRecord(id="r1", text="act now")
        html = render(source, [_span(8, 15, "r1")], [rec]).to_html()
        assert html.startswith("a &lt; b &amp; ")
        assert html.endswith(">act now</span>")

    def test_span_markup(self):
        source = "act now"
        rec = HighlightRecord(
            id="r1", text="act now", category=Category.LOGICAL_FALLACY, severity=3,
            label="Urgency", explanation='Says "now" to rush you',
        )
        (node,) = render(source, [_span(0, 7, "r1")], [rec]).highlights
        html = node.to_html()
        assert 'class="text-highlight fallacy"' in html
        assert 'data-severity="3"' in html
        assert 'data-tooltip="Says &quot;now&quot; to rush you"' in html

    def test_tooltip_falls_back_to_label(self):
        rec = HighlightRecord(id="r1", text="act now", label="Urgency")
        (node,) = render("act now", [_span(0, 7, "r1")], [rec]).highlights
        assert node.tooltip == "Urgency"

    def test_unmatched_ids(self):
        recs = [HighlightRecord(id="r1", text="act"), HighlightRecord(id="r2", text="zzz")]
        out = render("act now", [_span(0, 3, "r1")], recs)
        assert out.unmatched_ids == frozenset({"r2"})

    def test_record_looked_up_by_position(self):
        recs = [
            HighlightRecord(id="dup", text="zzz", explanation="A"),
            HighlightRecord(id="dup", text="now", category=Category.COGNITIVE_BIAS, explanation="B"),
        ]
        span = AcceptedSpan.promote(MatchCandidate(
            start=4, end=7, record_id="dup", match_type=MatchType.EXACT, priority=1, order=1))
        out = render("act now", [span], recs)
        (node,) = out.highlights
        assert node.css_class == "cognitive_bias"
        assert node.tooltip == "B"
        assert out.unmatched_ids == frozenset({"dup"})

    def test_no_spans(self):
        out = render("plain <text>", [], [])
        assert out.nodes == [TextSegment("plain <text>")]
        assert out.to_html() == "plain &lt;text&gt;"

    def test_empty_source(self):
        out = render("", [], [HighlightRecord(id="r1", text="x")])
        assert out.nodes == []
        assert out.unmatched_ids == frozenset({"r1"})


class TestSerialization:
    def test_to_dict(self):
        rec = HighlightRecord(id="r1", text="act now", category=Category.COGNITIVE_BIAS)
        d = render("so act now", [_span(3, 10, "r1")], [rec, HighlightRecord(id="r2", text="q")]).to_dict()
        assert d["spans"] == [{
            "record_id": "r1", "start": 3, "end": 10, "text": "act now",
            "class": "cognitive_bias", "match_type": "exact",
        }]
        assert d["unmatched_ids"] == ["r2"]

    def test_snippets_have_context(self):
        source = "so you must act now or never"
        rec = HighlightRecord(id="r1", text="act now")
        out = render(source, [_span(12, 19, "r1")], [rec])
        (snip,) = make_snippets(source, out, ctx=4)
        assert snip == {"record_id": "r1", "before": "ust ", "hit": "act now", "after": " or ", "offset": [12, 19]}

    def test_empty_output(self):
        assert AnnotatedOutput().to_html() == ""
