"""Top-level package for scatter-based single change point detection.

Re-exports the primary public API of the detector.
"""

from .config import Config, config
from .detect import ChangeDetector, detect_change, detect_on_array, detect_on_df_window
from .exceptions import ChangeDetectionError, ConfigurationError, WindowValidationError
from .logging_config import setup_logging
from .schema import ChangePoint, Outcome, Stats, TResult
from .student import Confidence, critical_value
from .ttest import significance_margin, ttest

__all__ = [
    "detect_change",
    "detect_on_array",
    "detect_on_df_window",
    "ChangeDetector",
    "ChangePoint",
    "Outcome",
    "Stats",
    "TResult",
    "Confidence",
    "critical_value",
    "significance_margin",
    "ttest",
    "Config",
    "config",
    "setup_logging",
    "ChangeDetectionError",
    "ConfigurationError",
    "WindowValidationError",
]
