"""source-metrics: code-quality metrics and statistically sound rollups."""

__version__ = "0.1.0"

from .analysis import ProjectAnalyzer  # noqa: E402
from .config import AnalysisConfig, ThresholdConfig, load_config  # noqa: E402
from .exceptions import SourceMetricsError  # noqa: E402
from .metrics import analyze_declaration, infer_type  # noqa: E402
from .rollup import EMPTY_ROLLUP, combine, fold  # noqa: E402

__all__ = [
    "__version__",
    "AnalysisConfig",
    "EMPTY_ROLLUP",
    "ProjectAnalyzer",
    "SourceMetricsError",
    "ThresholdConfig",
    "analyze_declaration",
    "combine",
    "fold",
    "infer_type",
    "load_config",
]
