"""Cross-page element analysis for Playwright page objects.

This package finds UI elements that recur across independently crawled
pages and proposes a stable locator, a member name and a BasePage
recommendation for each.

Main components:
- models: Core data models (ElementRecord, SimilarityResult, GroupedElement)
- analyzer: Analysis facade (normalize, filter, compare, group)
- collectors: Playwright element extraction
- reporters: JSON report and BasePage code output
- config: Configuration loading and validation
"""

__version__ = "0.1.0"

from .analyzer import AnalysisResult, ElementSimilarityAnalyzer
from .config import ScoutConfig, load_scout_config
from .models import (
    ElementCharacteristics,
    ElementRecord,
    GroupedElement,
    Recommendation,
    SimilarityClassification,
    SimilarityResult,
    Stability,
)

__all__ = [
    "__version__",
    # Analysis
    "AnalysisResult",
    "ElementSimilarityAnalyzer",
    # Config
    "ScoutConfig",
    "load_scout_config",
    # Models
    "ElementCharacteristics",
    "ElementRecord",
    "GroupedElement",
    "Recommendation",
    "SimilarityClassification",
    "SimilarityResult",
    "Stability",
]
