# repo_mcp/logging.py
import json
import logging
import re
from typing import Any, Dict

PII_RE = re.compile(r"([\w\.-]+)@([\w\.-]+)")  # naive email redaction
MAX_LOGGED_CHARS = 200


def configure_logging(level: str = "INFO"):
    # stdout belongs to the stdio transport; basicConfig logs to stderr
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def redact_str(s: str) -> str:
    return PII_RE.sub("[redacted-email]", s)


def summarize_str(s: str) -> str:
    s = redact_str(s)
    if len(s) > MAX_LOGGED_CHARS:
        return f"{s[:MAX_LOGGED_CHARS]}...[{len(s)} chars]"
    return s


def summarize_args(args: Dict[str, Any]) -> Dict[str, Any]:
    safe = json.loads(json.dumps(args, default=str))  # shallow copy via JSON
    for k, v in list(safe.items()):
        if isinstance(v, str):
            safe[k] = summarize_str(v)
    return safe


def log_tool_call(logger: logging.Logger, name: str, args: Dict[str, Any]):
    logger.info("tool_call %s %s", name, summarize_args(args))
