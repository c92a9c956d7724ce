"""Tests for loading the questionnaire YAML."""

import pytest

from eduavalia.data_loader import DataLoadError, QuestionnaireLoader
from eduavalia.models import RatingItem, TextItem


def test_default_questionnaire_loads(loader):
    sections = loader.sections
    assert [s.id for s in sections] == ["s1", "s2", "s3", "s4"]
    assert [s.kind for s in sections] == ["rating", "rating", "rating", "text"]
    assert all(isinstance(item, RatingItem) for item in sections[0].items)
    assert all(isinstance(item, TextItem) for item in sections[3].items)

    hours = sections[3].items[-1]
    assert hours.id == "4.8"
    assert hours.is_numeric


def test_rating_scale_labels(loader):
    scale = loader.rating_scale
    assert len(scale) == 5
    assert scale.label_for(1) == "Precisa de Melhoria Significativa"
    assert scale.label_for(5) == "Excepcional"
    assert scale.label_for(None) is None


def test_initial_form_is_blank(loader):
    form = loader.initial_form()
    assert form.personal_info.name == ""
    assert form.personal_info.date
    assert form.total_steps == 5
    assert all(item.rating is None for item in form.sections[0].items)


def test_missing_file_raises(tmp_path):
    with pytest.raises(DataLoadError):
        QuestionnaireLoader(tmp_path / "missing.yaml")


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("sections: [unclosed", encoding="utf-8")
    with pytest.raises(DataLoadError):
        QuestionnaireLoader(path).validate()


def test_duplicate_item_ids_rejected(tmp_path):
    path = tmp_path / "dup.yaml"
    path.write_text(
        """
ratingScale:
  - {value: 1, label: a}
  - {value: 2, label: b}
  - {value: 3, label: c}
  - {value: 4, label: d}
  - {value: 5, label: e}
sections:
  - id: s1
    title: Seção
    type: rating
    items:
      - {id: "1.1", question: primeira}
      - {id: "1.1", question: repetida}
""",
        encoding="utf-8",
    )
    with pytest.raises(DataLoadError, match="Duplicate item id"):
        QuestionnaireLoader(path).sections


def test_incomplete_rating_scale_rejected(tmp_path):
    path = tmp_path / "scale.yaml"
    path.write_text(
        "ratingScale:\n  - {value: 1, label: a}\nsections:\n  - {id: s1, type: rating, items: []}\n",
        encoding="utf-8",
    )
    with pytest.raises(DataLoadError):
        QuestionnaireLoader(path).rating_scale
