"""
Interview preparation scoring.
"""

from .success_score import InterviewReadiness, SuccessPrediction, predict_success

__all__ = [
    "InterviewReadiness",
    "SuccessPrediction",
    "predict_success",
]
