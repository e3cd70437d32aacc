"""JSONL findings file read/write with crash-tolerant parsing."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import orjson

from uiaudit.models.finding import FINDINGS_META_KEY, Finding, FindingsMeta


def write_findings(path: str | Path, meta: FindingsMeta, findings: list[Finding]) -> None:
    """Write the metadata header and all findings, replacing any existing file.

    Uses atomic write via temp file + rename so a crash never leaves a half-written report.
    """
    path = Path(path)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(orjson.dumps(meta.to_dict(), option=orjson.OPT_APPEND_NEWLINE))
            for finding in findings:
                f.write(orjson.dumps(finding.to_dict(), option=orjson.OPT_APPEND_NEWLINE))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise


def read_findings(path: str | Path) -> tuple[FindingsMeta | None, list[Finding]]:
    """Read a findings JSONL file, skipping corrupt lines."""
    path = Path(path)
    if not path.exists():
        return None, []

    meta: FindingsMeta | None = None
    findings: list[Finding] = []

    with open(path, "rb") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError:
                # Skip corrupt lines (likely truncated from crash)
                continue
            if not isinstance(data, dict):
                continue

            if data.get(FINDINGS_META_KEY):
                if meta is None:
                    meta = FindingsMeta.from_dict(data)
                continue
            try:
                findings.append(Finding.from_dict(data))
            except (TypeError, ValueError):
                continue

    return meta, findings
