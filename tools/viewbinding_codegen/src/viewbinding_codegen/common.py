from __future__ import annotations

import difflib
import os
import tempfile
from pathlib import Path

OUTPUT_MODE = 0o644


class ViewBindingError(Exception):
    pass


def replace_file(path: Path, content: str) -> None:
    # Readers see either the old header or the new one, never a partial write.
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        os.chmod(tmp_path, OUTPUT_MODE)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def write_output(path: Path, content: str, check: bool, dry_run: bool) -> int:
    """Write a generated header, replacing whatever is at ``path``.

    With ``check`` nothing is written; a unified diff is printed and 1 is
    returned when the file on disk is stale. Bytes that are not UTF-8 count
    as stale content.
    """
    if check:
        existing = path.read_bytes().decode("utf-8", errors="replace") if path.exists() else ""
        if existing == content:
            return 0
        diff = difflib.unified_diff(
            existing.splitlines(),
            content.splitlines(),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
            lineterm="",
        )
        print("\n".join(diff))
        return 1
    if not dry_run:
        replace_file(path, content)
    return 0
