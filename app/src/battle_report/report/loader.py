"""Utility helpers for reading report text from disk, bytes, or streams."""
from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256
from pathlib import Path
from typing import BinaryIO


@dataclass(frozen=True)
class ReportLoaderConfig:
    """Configuration knobs for the loader."""

    max_bytes: int = 1024 * 1024
    encoding: str = "utf-8"


@dataclass(frozen=True)
class LoadedReport:
    text: str
    raw_bytes: bytes
    sha256: str
    source_path: Path | None = None


class ReportLoaderError(ValueError):
    """Raised when the loader encounters invalid input."""


def load_report_text(
    source: str | Path | bytes | BinaryIO,
    *,
    config: ReportLoaderConfig | None = None,
) -> LoadedReport:
    """Read one report, rejecting payloads above ``config.max_bytes``."""

    cfg = config or ReportLoaderConfig()
    raw_bytes, source_path = _read_source(source, cfg.max_bytes)
    text = raw_bytes.decode(cfg.encoding, errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return LoadedReport(
        text=text,
        raw_bytes=raw_bytes,
        sha256=sha256(raw_bytes).hexdigest(),
        source_path=source_path,
    )


def _read_source(source: str | Path | bytes | BinaryIO, max_bytes: int) -> tuple[bytes, Path | None]:
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise FileNotFoundError(f"Report not found: {path}")
        if path.stat().st_size > max_bytes:
            raise ReportLoaderError(
                f"Report exceeds {max_bytes} bytes (received {path.stat().st_size} bytes)"
            )
        return path.read_bytes(), path

    if isinstance(source, bytes):
        return _validate_size(source, max_bytes), None

    if hasattr(source, "read"):
        data = source.read(max_bytes + 1)
        if isinstance(data, str):
            data = data.encode()
        return _validate_size(data, max_bytes), None

    raise ReportLoaderError(f"Unsupported source type: {type(source)!r}")


def _validate_size(data: bytes, max_bytes: int) -> bytes:
    if len(data) > max_bytes:
        raise ReportLoaderError(
            f"Report payload exceeds {max_bytes} bytes (received at least {len(data)} bytes)"
        )
    return data
