"""
Structured JSON logging with request_id, item_id(s) and menu API status when applicable.
Redact secrets in logged menu API responses.
"""
from __future__ import annotations

import json
import logging
import time
from contextvars import ContextVar
from typing import Any, Optional

from menu_admin.config import get_settings

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def _redact(obj: Any) -> Any:
    """Redact keys that might contain secrets (e.g. an echoed Authorization header)."""
    if isinstance(obj, dict):
        return {k: "***" if k.lower() in ("authorization", "token", "secret", "key") else _redact(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_redact(x) for x in obj]
    return obj


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S.000Z", time.gmtime(record.created)),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if request_id_ctx.get():
            log["request_id"] = request_id_ctx.get()
        if getattr(record, "item_id", None):
            log["item_id"] = str(record.item_id)
        if getattr(record, "item_ids", None):
            log["item_ids"] = [str(i) for i in record.item_ids]
        if getattr(record, "status_code", None):
            log["status_code"] = record.status_code
        if getattr(record, "menu_response", None):
            log["menu_response"] = _redact(record.menu_response)
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(get_settings().log_level.upper())
    return logger
