"""Rule engine: the check catalog and its evaluation."""

from .catalog import CATALOG, CHECK_IDS, get_check
from .engine import RuleEngine, evaluate
from .models import FAIL, INFO, SEVERITIES, WARN, Check, Finding, RuleSettings

__all__ = [
    "CATALOG",
    "CHECK_IDS",
    "FAIL",
    "INFO",
    "SEVERITIES",
    "WARN",
    "Check",
    "Finding",
    "RuleEngine",
    "RuleSettings",
    "evaluate",
    "get_check",
]
