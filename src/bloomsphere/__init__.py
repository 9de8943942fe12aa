"""
BloomSphere question generator and paper scorer client.

A Python package that drives the BloomSphere workflow: generating questions
from a source document with Bloom's taxonomy weights, reviewing and exporting
them, and scoring existing papers by cognitive level.
"""

__version__ = "1.0.0"
__author__ = "BloomSphere Development Team"

from src.bloomsphere.core.workflow import WorkflowController
from src.bloomsphere.core.scorer import PaperScorer

__all__ = [
    "WorkflowController",
    "PaperScorer",
]
