from __future__ import annotations
import json
from wavspectrum.config.validator import validate_analysis_config_dict
from wavspectrum.types import AnalysisConfig, DEFAULT_WINDOW_SIZE


def analysis_config_from_dict(j: dict) -> AnalysisConfig:
    """Build an AnalysisConfig from an already-parsed configuration dict."""
    validate_analysis_config_dict(j)
    analysis = j["analysis"]
    return AnalysisConfig(
        window_size=int(analysis.get("window_size", DEFAULT_WINDOW_SIZE)),
    )


def load_analysis_config(path: str) -> AnalysisConfig:
    """
    Load an analysis configuration from a JSON file.

    Args:
        path: Path to a JSON file shaped like {"analysis": {"window_size": 1024}}

    Returns:
        AnalysisConfig with defaults filled in
    """
    with open(path, "r", encoding="utf-8") as f:
        j = json.load(f)
    return analysis_config_from_dict(j)
