# =========================
# file: hlalign/service/api.py
# =========================
import logging
from typing import Any, Dict, List, Optional

import yaml
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from hlalign.service.runner import align_highlights, load_config
from hlalign.utils.common import deep_update

logger = logging.getLogger("api")
logger.setLevel(logging.INFO)

app = FastAPI(title="hlalign API", version="1.0.0")


class HighlightReq(BaseModel):
    source: str
    records: List[Dict[str, Any]]
    config: Optional[str] = None
    overrides: Optional[Dict[str, Any]] = None


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/highlight")
def highlight(req: HighlightReq):
    """
    Đồng bộ: định vị mọi highlight trong source, trả HTML + span + record không khớp.
    """
    try:
        cfg = deep_update(load_config(req.config), req.overrides)
    except (FileNotFoundError, yaml.YAMLError) as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Aligning {len(req.records)} records over {len(req.source)} chars")
    res = align_highlights(req.source, req.records, cfg=cfg)
    if res.unmatched_ids:
        logger.info(f"Unmatched records: {sorted(res.unmatched_ids)}")
    return res.to_dict()
