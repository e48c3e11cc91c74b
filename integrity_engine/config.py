"""
Configuration Service - Scoring policy and engine configuration management.

This module provides the ScoringPolicy value object consumed by the
integrity scorer and the ConfigurationService that loads engine settings
from a JSON file and environment variables.
"""

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Tuple

from .models import ScoreBand
from shared_utils.common import str_to_bool
from shared_utils.validation import validate_engine_configuration


logger = logging.getLogger(__name__)

BASE_SCORE = 100


class ConfigurationError(Exception):
    """Raised when engine configuration cannot be loaded or is invalid."""


class StrictnessProfile(Enum):
    """Proctoring strictness levels chosen by the instructor."""
    LENIENT = "lenient"
    STANDARD = "standard"
    STRICT = "strict"

    @property
    def grace_period_ms(self) -> int:
        """Time a window may stay unfocused before a blur is logged."""
        if self is StrictnessProfile.LENIENT:
            return 3000
        elif self is StrictnessProfile.STRICT:
            return 500
        return 1500


DEFAULT_BAND_THRESHOLDS: Tuple[Tuple[int, ScoreBand], ...] = (
    (90, ScoreBand.EXCELLENT),
    (70, ScoreBand.GOOD),
    (50, ScoreBand.FAIR),
)


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Penalty and banding policy for integrity scores.

    band_thresholds must be ordered by descending threshold; any score
    below the last threshold falls into ScoreBand.POOR.
    """
    deduction_per_violation: int = 10
    band_thresholds: Tuple[Tuple[int, ScoreBand], ...] = DEFAULT_BAND_THRESHOLDS

    def __post_init__(self):
        if self.deduction_per_violation < 0:
            raise ValueError(f"deduction_per_violation must be non-negative, got {self.deduction_per_violation}")
        thresholds = [threshold for threshold, _ in self.band_thresholds]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError(f"band_thresholds must be in descending order, got {thresholds}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'deduction_per_violation': self.deduction_per_violation,
            'band_thresholds': {band.label: threshold for threshold, band in self.band_thresholds}
        }


@dataclass
class EngineConfiguration:
    """Complete engine configuration."""
    scoring_policy: ScoringPolicy = field(default_factory=ScoringPolicy)
    strictness: StrictnessProfile = StrictnessProfile.STANDARD
    max_violations: int = 5
    wordcloud_max_words: int = 50
    wordcloud_exclude_numbers: bool = False
    student_min_responses: int = 5
    teacher_min_responses: int = 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON file layout."""
        return {
            'scoring': self.scoring_policy.to_dict(),
            'proctoring': {
                'strictness': self.strictness.value,
                'max_violations': self.max_violations
            },
            'wordcloud': {
                'max_words': self.wordcloud_max_words,
                'exclude_numbers': self.wordcloud_exclude_numbers,
                'student_min_responses': self.student_min_responses,
                'teacher_min_responses': self.teacher_min_responses
            }
        }


class ConfigurationService:
    """
    Service for managing engine configuration.

    Settings come from defaults, then the JSON file, then environment
    variables, in increasing order of precedence.
    """

    ENV_MAPPINGS = {
        "INTEGRITY_DEDUCTION_PER_VIOLATION": (("scoring", "deduction_per_violation"), int),
        "INTEGRITY_MAX_VIOLATIONS": (("proctoring", "max_violations"), int),
        "INTEGRITY_STRICTNESS": (("proctoring", "strictness"), lambda x: x.strip().lower()),
        "WORDCLOUD_MAX_WORDS": (("wordcloud", "max_words"), int),
        "WORDCLOUD_EXCLUDE_NUMBERS": (("wordcloud", "exclude_numbers"), str_to_bool),
    }

    def __init__(self, config_file: str = "config/default.json"):
        """
        Initialize configuration service.

        Args:
            config_file: Path to the configuration file
        """
        self.config_file = config_file

    def load_configuration(self, strict: bool = False) -> EngineConfiguration:
        """
        Load engine configuration from file and environment variables.

        Args:
            strict: Raise ConfigurationError instead of falling back to defaults

        Returns:
            EngineConfiguration instance
        """
        try:
            config_data = self._get_default_config()

            if os.path.exists(self.config_file):
                file_config = self._load_from_file(self.config_file)
                config_data = self._merge_sections(config_data, file_config)
                logger.info(f"Loaded configuration from {self.config_file}")
            else:
                logger.info(f"Config file {self.config_file} not found, using defaults")

            config_data = self._apply_environment_overrides(config_data)

            is_valid, errors = validate_engine_configuration(config_data)
            if not is_valid:
                raise ConfigurationError(f"Invalid configuration: {', '.join(errors)}")

            return self._dict_to_configuration(config_data)

        except ConfigurationError as e:
            if strict:
                raise
            logger.error(f"Error loading configuration: {e}")
            return EngineConfiguration()

    def save_configuration(self, config: EngineConfiguration) -> bool:
        """Save engine configuration to file."""
        try:
            config_dir = os.path.dirname(self.config_file)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=4)

            logger.info(f"Configuration saved to {self.config_file}")
            return True

        except OSError as e:
            logger.error(f"Error saving configuration: {e}")
            return False

    def apply_strictness_profile(self, config: EngineConfiguration,
                                 profile: StrictnessProfile) -> EngineConfiguration:
        """
        Return a copy of the configuration using the given strictness profile.

        Strict sessions also tolerate fewer violations before the final warning.
        """
        updated = copy.deepcopy(config)
        updated.strictness = profile
        if profile is StrictnessProfile.STRICT:
            updated.max_violations = min(config.max_violations, 3)
        logger.info(f"Applied strictness profile {profile.value} "
                    f"(grace period {profile.grace_period_ms}ms, max violations {updated.max_violations})")
        return updated

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration dictionary."""
        return EngineConfiguration().to_dict()

    def _load_from_file(self, config_file: str) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {config_file}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {config_file}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_file} must contain a JSON object")
        return data

    @staticmethod
    def _merge_sections(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Merge file sections into the defaults one level deep."""
        merged = copy.deepcopy(base)
        for section, values in overrides.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    def _apply_environment_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        for env_var, ((section, key), converter) in self.ENV_MAPPINGS.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            try:
                config_data.setdefault(section, {})[key] = converter(env_value)
                logger.info(f"Applied environment override: {section}.{key} = {config_data[section][key]}")
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid environment variable {env_var}={env_value}: {e}")

        return config_data

    def _dict_to_configuration(self, config_data: Dict[str, Any]) -> EngineConfiguration:
        """Convert a validated configuration dictionary to EngineConfiguration."""
        scoring = config_data.get("scoring", {})
        proctoring = config_data.get("proctoring", {})
        wordcloud = config_data.get("wordcloud", {})

        bands = {band.label: band for band in ScoreBand}
        thresholds = scoring.get("band_thresholds", {})
        band_thresholds = tuple(sorted(
            ((int(value), bands[name]) for name, value in thresholds.items()),
            key=lambda item: item[0],
            reverse=True
        )) or DEFAULT_BAND_THRESHOLDS

        try:
            policy = ScoringPolicy(
                deduction_per_violation=int(scoring.get("deduction_per_violation", 10)),
                band_thresholds=band_thresholds
            )
            strictness = StrictnessProfile(proctoring.get("strictness", "standard"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

        return EngineConfiguration(
            scoring_policy=policy,
            strictness=strictness,
            max_violations=int(proctoring.get("max_violations", 5)),
            wordcloud_max_words=int(wordcloud.get("max_words", 50)),
            wordcloud_exclude_numbers=bool(wordcloud.get("exclude_numbers", False)),
            student_min_responses=int(wordcloud.get("student_min_responses", 5)),
            teacher_min_responses=int(wordcloud.get("teacher_min_responses", 1))
        )


def load_engine_configuration(config_file: Optional[str] = None) -> EngineConfiguration:
    """Load configuration from INTEGRITY_CONFIG_FILE or the given path."""
    path = config_file or os.getenv("INTEGRITY_CONFIG_FILE", "config/default.json")
    return ConfigurationService(path).load_configuration()
