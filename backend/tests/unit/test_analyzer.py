"""Unit tests for the placeholder safety analyzer."""

from backend.app.models.enums import EmotionType, QueryCategory, RiskLevel, SafetyVerdict
from backend.app.services.analyzer import EMOTION_EMOJIS, MockSafetyAnalyzer


class TestMockSafetyAnalyzer:
    """Test cases for MockSafetyAnalyzer."""

    async def test_values_are_schema_valid(self):
        """Every analysis uses known enum values and a bounded confidence."""
        analyzer = MockSafetyAnalyzer(seed=7)

        for i in range(50):
            analysis = await analyzer.analyze(f"query {i}")

            assert analysis.safety in {v.value for v in SafetyVerdict}
            assert analysis.risk_level in {v.value for v in RiskLevel}
            assert analysis.category in {v.value for v in QueryCategory}
            assert analysis.emotion in {v.value for v in EmotionType}
            assert analysis.emotion_emoji == EMOTION_EMOJIS[analysis.emotion]
            assert 0.7 <= analysis.confidence <= 1.0
            assert 1 <= analysis.severity <= 10

    async def test_seed_is_deterministic(self):
        """Two analyzers with the same seed produce the same analyses."""
        first = MockSafetyAnalyzer(seed=42)
        second = MockSafetyAnalyzer(seed=42)

        for _ in range(10):
            assert await first.analyze("same text") == await second.analyze("same text")

    async def test_flagged_matches_unsafe(self):
        """is_unsafe follows the safety verdict."""
        analyzer = MockSafetyAnalyzer(seed=1)

        for _ in range(20):
            analysis = await analyzer.analyze("text")
            assert analysis.is_unsafe == (analysis.safety == "unsafe")
