"""Analysis configuration validation helpers."""
from __future__ import annotations
from typing import Any


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def validate_analysis_config_dict(j: dict) -> None:
    """Validate analysis configuration structure and core constraints."""
    errors: list[str] = []

    def err(msg: str) -> None:
        errors.append(msg)

    if not isinstance(j, dict):
        raise ValueError("configuration must be a JSON object.")

    analysis = j.get("analysis")
    if analysis is None:
        err("missing key: analysis")
    elif not isinstance(analysis, dict):
        err("analysis must be an object.")
    else:
        unknown = sorted(set(analysis) - {"window_size"})
        for k in unknown:
            err(f"unknown key: analysis.{k}")
        if "window_size" in analysis:
            w = analysis["window_size"]
            if not _is_int(w) or w <= 0:
                err("analysis.window_size must be a positive integer.")
            elif w & (w - 1):
                err("analysis.window_size must be a power of two.")

    if errors:
        raise ValueError("; ".join(errors))
