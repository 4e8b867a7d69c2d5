"""Download artifacts: safe file names, files on disk and data: URIs."""

import logging
import os
import re
from typing import Iterable, List, Tuple
from urllib.parse import quote

from .pipeline import ConversionResult

LOG = logging.getLogger("ascii_viewer.export")

MAX_NAME_LEN = 255
_ILLEGAL = re.compile(r'[/\\?<>:*|"\x00-\x1f\x80-\x9f]')
_WINDOWS_RESERVED = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
# left unescaped by JavaScript's encodeURIComponent, besides alphanumerics and -_.~
_URI_COMPONENT_SAFE = "!*'()"


def sanitize_filename(name: str) -> str:
    name = _ILLEGAL.sub("", name)
    if name in (".", ".."):
        return ""
    if _WINDOWS_RESERVED.match(name):
        return ""
    name = name.rstrip(". ")
    return name[:MAX_NAME_LEN]


def artifact_names(filename: str) -> Tuple[str, str]:
    stem = os.path.splitext(sanitize_filename(filename))[0] or "image"
    return f"{stem}.txt", f"{stem}.html"


def write_artifacts(
    result: ConversionResult,
    out_dir: str,
    filename: str,
    formats: Iterable[str] = ("txt", "html"),
) -> List[str]:
    formats = tuple(formats)
    unknown = set(formats) - {"txt", "html"}
    if unknown:
        raise ValueError(f"unknown artifact format(s): {', '.join(sorted(unknown))}")

    os.makedirs(out_dir, exist_ok=True)
    txt_name, html_name = artifact_names(filename)

    written = []
    if "txt" in formats:
        path = os.path.join(out_dir, txt_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(result.text + "\n")
        written.append(path)
    if "html" in formats:
        path = os.path.join(out_dir, html_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(result.html)
        written.append(path)

    LOG.debug("Wrote %d artifact(s) for %s", len(written), filename)
    return written


def data_uri(text: str, mime: str = "text/plain") -> str:
    return f"data:{mime};charset=utf-8,{quote(text, safe=_URI_COMPONENT_SAFE)}"
