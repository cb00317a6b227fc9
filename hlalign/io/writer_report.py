# =========================
# file: hlalign/io/writer_report.py
# =========================
from pathlib import Path
import json
import html
from typing import Any, Dict

from hlalign.report.highlight import make_snippets
from hlalign.service.runner import AlignmentResult


def write_json_report(path: Path, res: AlignmentResult, cfg: Dict[str, Any]):
    obj = res.output.to_dict()
    obj["summary"] = res.summary
    obj["snippets"] = make_snippets(res.source, res.output)
    obj["meta"] = {"cfg": cfg}
    path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")


def _esc(s: str) -> str:
    return html.escape(s, quote=False)


def _get_css() -> str:
    """CSS nhúng thẳng vào HTML để file report đứng độc lập."""
    return """
    :root {
      --bg: #f8fafc; --card: #ffffff; --text: #0f172a; --muted: #64748b; --border: #e2e8f0;
      --manip: #fecaca; --bias: #fde68a; --fallacy: #bfdbfe;
    }
    body { font-family: 'Inter', system-ui, -apple-system, sans-serif; background: var(--bg); color: var(--text); margin: 0; padding: 20px; line-height: 1.5; }
    .container { max-width: 1100px; margin: 0 auto; }
    h1 { font-size: 24px; font-weight: 700; margin: 0 0 16px; }
    .card { background: var(--card); border: 1px solid var(--border); border-radius: 12px; padding: 20px; margin-bottom: 20px; }
    .metrics-grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 16px; }
    .metric { text-align: center; padding: 16px; background: #f1f5f9; border-radius: 8px; }
    .metric-val { font-size: 24px; font-weight: 700; display: block; }
    .metric-label { font-size: 12px; color: var(--muted); text-transform: uppercase; }
    .transcript { white-space: pre-wrap; word-wrap: break-word; font-size: 15px; }
    .text-highlight { border-radius: 2px; padding: 1px 0; cursor: help; position: relative; }
    .text-highlight.manipulation { background: var(--manip); }
    .text-highlight.cognitive_bias { background: var(--bias); }
    .text-highlight.fallacy { background: var(--fallacy); }
    .text-highlight[data-severity="3"] { border-bottom: 2px solid #ef4444; }
    .text-highlight:hover::after {
      content: attr(data-tooltip); position: absolute; left: 0; top: 1.6em; z-index: 10;
      width: 320px; padding: 8px; background: #0f172a; color: #fff; font-size: 12px; border-radius: 6px;
    }
    .unmatched { color: var(--muted); font-family: monospace; font-size: 12px; }
    """


def write_html_report(path: Path, res: AlignmentResult, title: str = "Negotiation Highlights"):
    s = res.summary
    counts = s.get("counts_by_category", {})
    parts = [f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{_esc(title)}</title>
  <style>{_get_css()}</style>
</head>
<body>
<div class="container">
  <h1>{_esc(title)}</h1>
  <section class="card">
    <div class="metrics-grid">
      <div class="metric"><span class="metric-val">{s.get('matched', 0)} / {s.get('records', 0)}</span><span class="metric-label">Matched</span></div>
      <div class="metric"><span class="metric-val">{counts.get('manipulation', 0)}</span><span class="metric-label">Manipulation</span></div>
      <div class="metric"><span class="metric-val">{counts.get('cognitive_bias', 0)}</span><span class="metric-label">Cognitive bias</span></div>
      <div class="metric"><span class="metric-val">{counts.get('rhetorical_fallacy', 0) + counts.get('logical_fallacy', 0)}</span><span class="metric-label">Fallacy</span></div>
    </div>
  </section>
  <section class="card transcript">{res.output.to_html()}</section>
"""]
    if res.unmatched_ids:
        ids = ", ".join(_esc(i) for i in sorted(res.unmatched_ids))
        parts.append(f'  <section class="card unmatched">Unmatched: {ids}</section>\n')
    parts.append("</div></body></html>\n")
    path.write_text("".join(parts), encoding="utf-8")
