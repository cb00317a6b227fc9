# =========================
# file: hlalign/cli/annotate.py
# =========================
import argparse
import json
import logging
from pathlib import Path

from hlalign.io.docx_reader import read_source_text
from hlalign.io.records_reader import read_records
from hlalign.io.writer_report import write_html_report, write_json_report
from hlalign.service.runner import align_highlights, load_config
from hlalign.utils.logging import JsonLogger
from hlalign.utils.timing import Timer

logger = logging.getLogger(__name__)


def run_annotate(source_path: str, records_path: str, out_dir: str, config_path: str = None) -> dict:
    cfg = load_config(config_path)
    outp = Path(out_dir)
    outp.mkdir(parents=True, exist_ok=True)

    with JsonLogger(outp / "logs.jsonl") as jlog:
        timer = Timer(logger=jlog)
        with timer.section("read_inputs"):
            source = read_source_text(source_path)
            records = read_records(records_path)
        res = align_highlights(source, records, cfg=cfg, timer=timer)
        jlog.log({"event": "summary", **res.summary, "unmatched_ids": sorted(res.unmatched_ids)})

    if res.unmatched_ids:
        logger.warning(f"{len(res.unmatched_ids)} record(s) could not be located in the source")

    write_json_report(outp / "report.json", res, cfg)
    write_html_report(outp / "report.html", res, title=cfg.get("report", {}).get("title", "Negotiation Highlights"))
    return {"ok": True, "out": str(outp), "summary": res.summary}


def main():
    ap = argparse.ArgumentParser(description="Locate highlight snippets in a transcript and render them.")
    ap.add_argument("--source", required=True, help=".txt or .docx transcript")
    ap.add_argument("--records", required=True, help="JSON / NDJSON highlight records")
    ap.add_argument("--out", required=True)
    ap.add_argument("--config", default=None)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    res = run_annotate(args.source, args.records, args.out, args.config)
    print(json.dumps(res, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
