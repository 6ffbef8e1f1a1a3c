"""
Safety analyzer interface.

The service scores query text through any object satisfying SafetyAnalyzer.
MockSafetyAnalyzer is a placeholder that draws random verdicts until a real
model-backed analyzer is plugged in; nothing downstream depends on its
distribution.
"""

import logging
import random
from typing import Protocol

from backend.app.models.enums import EmotionType, QueryCategory, RiskLevel, SafetyVerdict
from backend.app.services.records import QueryAnalysis

logger = logging.getLogger(__name__)

EMOTION_EMOJIS = {
    EmotionType.HAPPY.value: "😊",
    EmotionType.SAD.value: "😢",
    EmotionType.ANGRY.value: "😠",
    EmotionType.CONFUSED.value: "😕",
    EmotionType.FEARFUL.value: "😨",
    EmotionType.NEUTRAL.value: "😐",
    EmotionType.EXCITED.value: "🤩",
    EmotionType.FRUSTRATED.value: "😤",
}

_MOCK_CATEGORIES = [
    QueryCategory.EDUCATIONAL,
    QueryCategory.CREATIVE,
    QueryCategory.TECHNICAL,
    QueryCategory.BUSINESS,
    QueryCategory.NONE,
]


class SafetyAnalyzer(Protocol):
    """Protocol for services that score query text for safety."""

    async def analyze(self, text: str) -> QueryAnalysis:
        """
        Analyze query text.

        Args:
            text: Query text to score

        Returns:
            QueryAnalysis for the text
        """
        ...


class MockSafetyAnalyzer:
    """Placeholder analyzer returning random, schema-valid analyses."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    async def analyze(self, text: str) -> QueryAnalysis:
        rng = self._rng
        safety = SafetyVerdict.SAFE if rng.random() > 0.2 else SafetyVerdict.UNSAFE

        roll = rng.random()
        if roll > 0.8:
            risk_level = RiskLevel.HIGH
        elif roll > 0.5:
            risk_level = RiskLevel.MEDIUM
        else:
            risk_level = RiskLevel.LOW

        emotion = rng.choice([EmotionType.NEUTRAL, EmotionType.HAPPY, EmotionType.CONFUSED])
        analysis = QueryAnalysis(
            safety=safety.value,
            risk_level=risk_level.value,
            confidence=0.7 + rng.random() * 0.3,
            category=rng.choice(_MOCK_CATEGORIES).value,
            severity=rng.randint(1, 10),
            emotion=emotion.value,
            emotion_emoji=EMOTION_EMOJIS[emotion.value],
            reason="Automated analysis completed",
            ai_response="This is a placeholder response from the analysis system.",
        )
        logger.debug(f"[ANALYZER] Mock analysis for {len(text)} chars: {analysis.safety}/{analysis.risk_level}")
        return analysis
