"""
Outcome and prediction records.

An Outcome is one completed round as reported by the result feed.
A Prediction is the guess for the next round; it is created fresh on
every call and never mutated by the predictor.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from colorpredict.utils.classify import big_small, odd_even


@dataclass(frozen=True)
class Outcome:
    """
    One completed round.

    prior_prediction is the BIG/SMALL guess that existed for this
    round's period, when one was made.
    """
    period_id: str
    result: int
    timestamp: datetime
    prior_prediction: Optional[str] = None

    @property
    def big_small(self) -> str:
        return big_small(self.result)

    @property
    def odd_even(self) -> str:
        return odd_even(self.result)

    def to_dict(self) -> dict:
        return {
            "period_id": self.period_id,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
            "prior_prediction": self.prior_prediction,
        }


@dataclass
class Prediction:
    """
    Prediction for the next round.

    Invariants:
    - number is 0-9
    - big_small is BIG iff number >= 5
    - odd_even is EVEN iff number is even
    - color is derived from number and game variant
    """
    number: int
    confidence: float  # 0-1 scale
    color: str
    big_small: str
    odd_even: str
    reasoning: List[str] = field(default_factory=list)

    # Metadata
    rule: str = "DEGRADED"
    variant: str = ""
    time_option: str = ""

    @property
    def confidence_percent(self) -> float:
        """Return confidence as percentage for display."""
        return self.confidence * 100

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "confidence": self.confidence,
            "color": self.color,
            "big_small": self.big_small,
            "odd_even": self.odd_even,
            "reasoning": list(self.reasoning),
            "rule": self.rule,
            "variant": self.variant,
            "time_option": self.time_option,
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "Prediction":
        return cls(
            number=int(payload["number"]),
            confidence=float(payload["confidence"]),
            color=payload["color"],
            big_small=payload["big_small"],
            odd_even=payload["odd_even"],
            reasoning=list(payload.get("reasoning") or []),
            rule=payload.get("rule", "DEGRADED"),
            variant=payload.get("variant", ""),
            time_option=payload.get("time_option", ""),
        )

    def to_display_dict(self) -> dict:
        """
        Convert to display format with user-friendly values.
        Percentages, uppercase color, etc.
        """
        return {
            'Number': self.number,
            'Color': self.color.upper(),
            'Big/Small': self.big_small,
            'Odd/Even': self.odd_even,
            'Confidence': f"{self.confidence_percent:.0f}%",
            'Rule': self.rule,
        }
