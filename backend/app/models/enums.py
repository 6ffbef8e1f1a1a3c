"""Closed value sets shared by the ORM models, schemas and services."""

from enum import Enum


class SafetyVerdict(str, Enum):
    """Safety verdict of an analyzed query."""
    SAFE = "safe"
    UNSAFE = "unsafe"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    """Risk level of an analyzed query."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class QueryCategory(str, Enum):
    """Content category assigned by the analyzer."""
    HATE_SPEECH = "Hate Speech"
    HARASSMENT = "Harassment"
    SEXUALLY_EXPLICIT = "Sexually Explicit"
    DANGEROUS_ILLEGAL = "Dangerous & Illegal"
    PROMPT_INJECTION = "Prompt Injection"
    MISINFORMATION = "Misinformation"
    EDUCATIONAL = "Educational"
    CREATIVE = "Creative"
    TECHNICAL = "Technical"
    BUSINESS = "Business"
    NONE = "None"


class EmotionType(str, Enum):
    """Dominant emotion detected in a query."""
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    CONFUSED = "confused"
    FEARFUL = "fearful"
    NEUTRAL = "neutral"
    EXCITED = "excited"
    FRUSTRATED = "frustrated"


class ReportType(str, Enum):
    """Kind of report requested by the user."""
    SAFETY_ANALYSIS = "Safety Analysis"
    RISK_ASSESSMENT = "Risk Assessment"
    EMOTIONAL_ANALYSIS = "Emotional Analysis"
    USAGE_STATISTICS = "Usage Statistics"
    CUSTOM_REPORT = "Custom Report"


class ReportFormat(str, Enum):
    """Export format tag carried by a report."""
    CSV = "csv"
    XLSX = "xlsx"
    PDF = "pdf"
    JSON = "json"


class ReportStatus(str, Enum):
    """Report lifecycle status."""
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"
