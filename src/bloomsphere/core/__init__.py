"""
Core functionality for question generation, scoring and export.
"""

from src.bloomsphere.core.client import BloomSphereClient
from src.bloomsphere.core.exporter import ExportEngine
from src.bloomsphere.core.scorer import PaperScorer
from src.bloomsphere.core.weights import WeightsEngine
from src.bloomsphere.core.workflow import WorkflowController

__all__ = [
    "BloomSphereClient",
    "ExportEngine",
    "PaperScorer",
    "WeightsEngine",
    "WorkflowController",
]
