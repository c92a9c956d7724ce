"""Shared fixtures for questionnaire tests."""

from dataclasses import replace

import pytest

from eduavalia.data_loader import QuestionnaireLoader
from eduavalia.models import FormState, PersonalInfo, RatingItem, RatingLevel, RatingScale, Section, TextItem


@pytest.fixture
def loader():
    return QuestionnaireLoader()


@pytest.fixture
def scale():
    return RatingScale([
        RatingLevel(1, "Precisa de Melhoria Significativa", "Requer atenção imediata e suporte."),
        RatingLevel(2, "Precisa de Melhoria", "Há potencial, mas ajustes são necessários."),
        RatingLevel(3, "Adequado", "Desempenho satisfatório."),
        RatingLevel(4, "Bom", "Eficaz e consistente."),
        RatingLevel(5, "Excepcional", "Alta proficiência."),
    ])


@pytest.fixture
def small_form():
    """One rating section and one text section with a numeric item."""
    return FormState(
        personal_info=PersonalInfo(name="", date="2025-11-20", subject_context=""),
        sections=[
            Section(
                id="s1",
                title="Seção 1: Conhecimento",
                description="",
                kind="rating",
                items=[
                    RatingItem(id="1.1", question="1.1 Entendimento"),
                    RatingItem(id="1.2", question="1.2 Estratégias"),
                ],
            ),
            Section(
                id="s2",
                title="Seção 2: Reflexão",
                description="",
                kind="text",
                items=[
                    TextItem(id="2.1", question="2.1 Motivação"),
                    TextItem(id="2.2", question="2.2 Horas/mês", input_kind="number"),
                ],
            ),
        ],
    )


def fill_everything(form: FormState) -> FormState:
    """Return a copy of ``form`` where every field and item is valid."""
    sections = []
    for section in form.sections:
        items = []
        for item in section.items:
            if isinstance(item, RatingItem):
                items.append(replace(item, rating=4, comment="Exemplo concreto"))
            elif item.is_numeric:
                items.append(replace(item, answer="6"))
            else:
                items.append(replace(item, answer="Resposta suficientemente longa"))
        sections.append(replace(section, items=items))
    info = PersonalInfo(name="Maria Souza", date="2025-11-20", subject_context="TEA")
    return FormState(personal_info=info, sections=sections)


@pytest.fixture
def fill():
    return fill_everything
