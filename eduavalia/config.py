"""Runtime settings read from environment variables."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_INSTITUTION = "CEC - Centro de Educação e Cultura"
DEFAULT_QUESTIONNAIRE = Path(__file__).parent / "yaml" / "questionnaire.yaml"
DEFAULT_TEMPERATURE = 0.7


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str]
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    institution: str = DEFAULT_INSTITUTION
    questionnaire_path: Path = DEFAULT_QUESTIONNAIRE
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key)


def _parse_temperature(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TEMPERATURE
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid EDUAVALIA_TEMPERATURE=%r", raw)
        return DEFAULT_TEMPERATURE


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``env`` (defaults to ``os.environ``)."""
    env = os.environ if env is None else env
    questionnaire = env.get("EDUAVALIA_QUESTIONNAIRE")
    return Settings(
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        model=env.get("EDUAVALIA_MODEL") or DEFAULT_MODEL,
        temperature=_parse_temperature(env.get("EDUAVALIA_TEMPERATURE")),
        institution=env.get("EDUAVALIA_INSTITUTION") or DEFAULT_INSTITUTION,
        questionnaire_path=Path(questionnaire) if questionnaire else DEFAULT_QUESTIONNAIRE,
        log_level=(env.get("EDUAVALIA_LOG_LEVEL") or "INFO").upper(),
    )
