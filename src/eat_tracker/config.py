"""Configuration management for eat_tracker.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
Every tunable constant of the scoring and scheduling pipeline lives here.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "ScoringSettings",
    "SchedulerSettings",
    "AnalyticsSettings",
    "LoggingSettings",
    "EatTrackerConfig",
]


class ScoringSettings(BaseSettings):
    """Priority scoring weights and cutoffs.

    The seven factor weights are expected to sum to 1.0 so the
    composite score stays within 0-100.
    """

    model_config = SettingsConfigDict(
        env_prefix="EAT_TRACKER_SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Factor weights
    weight_frequency: float = Field(default=0.25, ge=0.0, le=1.0)
    weight_exam: float = Field(default=0.20, ge=0.0, le=1.0)
    weight_recency: float = Field(default=0.15, ge=0.0, le=1.0)
    weight_low_confidence: float = Field(default=0.15, ge=0.0, le=1.0)
    weight_time_pressure: float = Field(default=0.10, ge=0.0, le=1.0)
    weight_difficulty: float = Field(default=0.10, ge=0.0, le=1.0)
    weight_performance_gap: float = Field(default=0.05, ge=0.0, le=1.0)

    # Urgency cutoffs (post source-quality multiplier)
    urgent_threshold: float = 80.0
    high_threshold: float = 60.0
    moderate_threshold: float = 40.0

    dominant_error_threshold: float = 0.6
    default_exam_weight: float = Field(default=0.5, ge=0.0, le=1.0)

    # Recency: exp(-decay * days), floored
    recency_decay_rate: float = 0.1
    recency_floor: float = 0.1
    recency_floor_days: int = 30


class SchedulerSettings(BaseSettings):
    """Study plan generation settings."""

    model_config = SettingsConfigDict(
        env_prefix="EAT_TRACKER_SCHEDULER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Topics scheduled per exam-proximity tier
    topic_limit_default: int = 8
    topic_limit_mid_term: int = 10
    topic_limit_near_term: int = 12
    topic_limit_cram: int = 15

    # Day boundaries between tiers
    long_term_days: int = 90
    mid_term_days: int = 30
    cram_days: int = 7

    dominant_error_threshold: float = 0.6
    strategy_duration_bonus: int = 5
    horizon_days: int = 14


class AnalyticsSettings(BaseSettings):
    """Organ-system analytics settings."""

    model_config = SettingsConfigDict(
        env_prefix="EAT_TRACKER_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    trend_window_days: int = 7
    trend_change_percent: float = 10.0


class LoggingSettings(BaseSettings):
    """Logging output settings."""

    model_config = SettingsConfigDict(
        env_prefix="EAT_TRACKER_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False


class EatTrackerConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = EatTrackerConfig()
        scorer = PriorityScorer(config.scoring)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    scoring: ScoringSettings = ScoringSettings()
    scheduler: SchedulerSettings = SchedulerSettings()
    analytics: AnalyticsSettings = AnalyticsSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def scoring_weight_total(self) -> float:
        """Sum of the seven factor weights."""
        s = self.scoring
        return (
            s.weight_frequency
            + s.weight_exam
            + s.weight_recency
            + s.weight_low_confidence
            + s.weight_time_pressure
            + s.weight_difficulty
            + s.weight_performance_gap
        )
