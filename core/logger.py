# core/logger.py
import datetime
import json
import logging
import os

LOGFILE = os.environ.get("CALC_TUTOR_LOGFILE") or os.path.join(os.getcwd(), "calc_tutor_log.jsonl")

logger = logging.getLogger(__name__)


def log_query(entry: dict):
    entry = dict(entry)
    entry.setdefault("ts", datetime.datetime.now().isoformat())
    try:
        with open(LOGFILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")
    except OSError as e:
        logger.warning("could not write query log %s: %s", LOGFILE, e)
