"""
Interview success prediction.

Combines preparation signals into a 0-100 readiness score:
- Checklist completion for the interview
- Number of practice answers submitted
- Number of completed mock interview sessions
- Lead time until the interview date
- Historical offer rate from past interviews
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


# Points available per factor, total 100
WEIGHTS = {
    "checklist": 25,
    "practice": 20,
    "mock": 20,
    "time": 15,
    "history": 20,
}

PRACTICE_TARGET = 10
MOCK_TARGET = 3
CHECKLIST_TARGET_PERCENT = 80
DEFAULT_SUCCESS_RATE = 50.0
MAX_ACTIONS = 3

LOW_CONFIDENCE_HISTORY = 3
MEDIUM_CONFIDENCE_HISTORY = 10


@dataclass
class InterviewReadiness:
    """Preparation state for one upcoming interview."""
    checklist_total: int = 0
    checklist_completed: int = 0
    practice_count: int = 0
    mock_session_count: int = 0
    days_until_interview: Optional[int] = None
    past_interviews: int = 0
    past_offers: int = 0

    @property
    def checklist_completion(self) -> float:
        if self.checklist_total <= 0:
            return 0.0
        done = min(max(self.checklist_completed, 0), self.checklist_total)
        return done / self.checklist_total * 100

    @property
    def historical_success_rate(self) -> float:
        if self.past_interviews <= 0:
            return DEFAULT_SUCCESS_RATE
        offers = min(max(self.past_offers, 0), self.past_interviews)
        return offers / self.past_interviews * 100


@dataclass(frozen=True)
class SuccessPrediction:
    """Predicted interview readiness."""
    predicted_score: int
    confidence_band: str  # low, medium, high
    top_actions: tuple[str, ...] = ()
    score_factors: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "predicted_score": self.predicted_score,
            "confidence_band": self.confidence_band,
            "top_actions": list(self.top_actions),
            "score_factors": dict(self.score_factors),
        }


def _time_percent(days: Optional[int]) -> int:
    """Percentage of the time weight earned for a given lead time."""
    if days is None or days < 1:
        return 50
    if days <= 7:
        return 100
    if days <= 14:
        return 85
    return 70


def _confidence_band(past_interviews: int) -> str:
    if past_interviews < LOW_CONFIDENCE_HISTORY:
        return "low"
    if past_interviews < MEDIUM_CONFIDENCE_HISTORY:
        return "medium"
    return "high"


def predict_success(readiness: InterviewReadiness) -> SuccessPrediction:
    """
    Predict how likely an interview is to go well.

    Args:
        readiness: Preparation signals for the interview

    Returns:
        SuccessPrediction with the score, a confidence band based on how much
        interview history backs it, and up to three actions ordered by the
        points each one would recover
    """
    completion = readiness.checklist_completion
    practice = max(readiness.practice_count, 0)
    mocks = max(readiness.mock_session_count, 0)
    days = readiness.days_until_interview
    success_rate = readiness.historical_success_rate

    checklist_points = completion / 100 * WEIGHTS["checklist"]
    practice_points = min(practice / PRACTICE_TARGET * WEIGHTS["practice"], WEIGHTS["practice"])
    mock_points = min(mocks / MOCK_TARGET * WEIGHTS["mock"], WEIGHTS["mock"])
    time_points = WEIGHTS["time"] * _time_percent(days) / 100
    history_points = success_rate / 100 * WEIGHTS["history"]

    total = checklist_points + practice_points + mock_points + time_points + history_points
    predicted = max(0, min(100, int(math.floor(total + 0.5))))

    actions: list[tuple[float, str]] = []
    if completion < CHECKLIST_TARGET_PERCENT:
        actions.append((
            WEIGHTS["checklist"] - checklist_points,
            f"Complete interview checklist ({readiness.checklist_completed}/"
            f"{readiness.checklist_total} done)",
        ))
    if practice < PRACTICE_TARGET:
        actions.append((
            WEIGHTS["practice"] - practice_points,
            f"Practice more questions ({practice}/{PRACTICE_TARGET} recommended)",
        ))
    if mocks < MOCK_TARGET:
        actions.append((
            WEIGHTS["mock"] - mock_points,
            f"Complete mock interviews ({mocks}/{MOCK_TARGET} recommended)",
        ))
    if days is None or days < 1:
        actions.append((
            WEIGHTS["time"] * 0.5,
            "Schedule interview with more lead time for better preparation",
        ))
    elif days > 14:
        actions.append((
            WEIGHTS["time"] * 0.3,
            "Keep practicing regularly as interview approaches",
        ))

    # sorted() is stable, so equal gains keep the order above
    top_actions = [text for _, text in sorted(actions, key=lambda a: a[0], reverse=True)]

    factors = {
        "checklist_completion": completion,
        "checklist_weight": WEIGHTS["checklist"],
        "practice_count": practice,
        "practice_weight": WEIGHTS["practice"],
        "mock_session_count": mocks,
        "mock_weight": WEIGHTS["mock"],
        "days_until_interview": days,
        "time_weight": WEIGHTS["time"],
        "historical_success_rate": success_rate,
        "history_weight": WEIGHTS["history"],
    }

    logger.debug("Interview readiness %d from %s", predicted, factors)

    return SuccessPrediction(
        predicted_score=predicted,
        confidence_band=_confidence_band(readiness.past_interviews),
        top_actions=tuple(top_actions[:MAX_ACTIONS]),
        score_factors=factors,
    )
