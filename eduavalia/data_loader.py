"""Data loader for the questionnaire YAML file."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from eduavalia.config import DEFAULT_QUESTIONNAIRE
from eduavalia.models import (
    SECTION_KIND_RATING,
    FormState,
    PersonalInfo,
    RatingItem,
    RatingLevel,
    RatingScale,
    Section,
    TextItem,
)

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """Custom exception for data loading errors."""
    pass


class QuestionnaireLoader:
    """Loads the questionnaire sections and rating scale from YAML."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else DEFAULT_QUESTIONNAIRE

        if not self.path.exists():
            raise DataLoadError(f"Questionnaire file not found: {self.path}")

        self._data: Optional[Dict[str, Any]] = None
        self._rating_scale: Optional[RatingScale] = None
        self._sections: Optional[List[Section]] = None

    def load_yaml(self) -> Dict[str, Any]:
        """Load the YAML file with error handling."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            error_msg = f"YAML parsing error in {self.path.name}: {str(e)}"
            logger.error(error_msg)
            raise DataLoadError(error_msg) from e
        except OSError as e:
            error_msg = f"Error loading {self.path.name}: {str(e)}"
            logger.error(error_msg)
            raise DataLoadError(error_msg) from e

        if not isinstance(data, dict):
            error_msg = f"Empty or invalid YAML file: {self.path.name}"
            logger.error(error_msg)
            raise DataLoadError(error_msg)
        return data

    @property
    def data(self) -> Dict[str, Any]:
        if self._data is None:
            self._data = self.load_yaml()
        return self._data

    @property
    def title(self) -> str:
        return self.data.get("title", "")

    @property
    def introduction(self) -> str:
        return self.data.get("introduction", "")

    @property
    def rating_scale(self) -> RatingScale:
        """Get the rating scale, loading if necessary."""
        if self._rating_scale is None:
            levels = []
            for entry in self.data.get("ratingScale", []):
                try:
                    levels.append(RatingLevel(
                        value=int(entry["value"]),
                        label=entry["label"],
                        description=entry.get("description", ""),
                    ))
                except (KeyError, TypeError, ValueError) as e:
                    raise DataLoadError(f"Invalid rating scale entry: {entry!r}") from e
            try:
                self._rating_scale = RatingScale(levels)
            except ValueError as e:
                raise DataLoadError(str(e)) from e
        return self._rating_scale

    @property
    def sections(self) -> List[Section]:
        """Get the questionnaire sections, loading if necessary."""
        if self._sections is None:
            raw_sections = self.data.get("sections", [])
            if not raw_sections:
                raise DataLoadError(f"No sections found in {self.path.name}")
            self._sections = [self._build_section(raw) for raw in raw_sections]
            logger.info(
                "Loaded %d sections (%d items) from %s",
                len(self._sections),
                sum(len(s.items) for s in self._sections),
                self.path.name,
            )
        return self._sections

    def _build_section(self, raw: Dict[str, Any]) -> Section:
        kind = raw.get("type", SECTION_KIND_RATING)
        try:
            items = [self._build_item(kind, item) for item in raw.get("items", [])]
            return Section(
                id=str(raw["id"]),
                title=raw.get("title", ""),
                description=raw.get("description", ""),
                kind=kind,
                items=items,
            )
        except (KeyError, ValueError) as e:
            raise DataLoadError(f"Invalid section {raw.get('id', '?')!r}: {e}") from e

    @staticmethod
    def _build_item(kind: str, raw: Dict[str, Any]):
        if kind == SECTION_KIND_RATING:
            return RatingItem(
                id=str(raw["id"]),
                question=raw["question"],
                comment_placeholder=raw.get("commentPlaceholder"),
            )
        return TextItem(
            id=str(raw["id"]),
            question=raw["question"],
            description=raw.get("description"),
            input_kind=raw.get("inputType", "text"),
        )

    def validate(self) -> None:
        """Parse everything up front so a broken file fails at startup, not mid-form."""
        self.rating_scale
        self.sections

    def initial_form(self) -> FormState:
        """A blank form: empty answers, today's date."""
        return FormState(personal_info=PersonalInfo(), sections=tuple(self.sections))
