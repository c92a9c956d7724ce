"""Tests for report payload/prompt building and the generator wrapper."""

import json
from types import SimpleNamespace

import pytest

from eduavalia.config import Settings
from eduavalia.report_service import (
    EMPTY_REPORT_FALLBACK,
    ReportGenerationError,
    ReportGenerator,
    build_prompt,
    build_report_payload,
)


class _FakeCompletions:
    """Records calls and returns a canned response or raises."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeClient:
    def __init__(self, completions):
        self.chat = SimpleNamespace(completions=completions)


def _settings(**overrides):
    values = {"openai_api_key": "sk-test", "model": "gpt-test", "institution": "Escola Exemplo"}
    values.update(overrides)
    return Settings(**values)


def test_payload_resolves_rating_labels(small_form, fill, scale):
    """Ratings are serialized with their label; text items carry the answer."""
    payload = build_report_payload(fill(small_form), scale, "Escola Exemplo")

    assert payload["instituicao"] == "Escola Exemplo"
    assert payload["auxiliar"] == "Maria Souza"
    assert payload["data"] == "2025-11-20"
    assert payload["aluno_transtorno"] == "TEA"

    ratings, texts = payload["avaliacoes"]
    assert ratings["secao"] == "Seção 1: Conhecimento"
    assert ratings["itens"][0] == {
        "pergunta": "1.1 Entendimento",
        "nota": 4,
        "nivel": "Bom",
        "comentario_justificativa": "Exemplo concreto",
    }
    assert texts["itens"][1] == {"pergunta": "2.2 Horas/mês", "resposta": "6"}


def test_payload_keeps_unrated_items_with_empty_label(small_form, scale):
    payload = build_report_payload(small_form, scale)
    item = payload["avaliacoes"][0]["itens"][0]
    assert item["nota"] is None
    assert item["nivel"] is None


def test_prompt_requires_prose_and_embeds_json(small_form, fill, scale):
    payload = build_report_payload(fill(small_form), scale, "Escola Exemplo")
    prompt = build_prompt(payload, "Escola Exemplo")

    assert "Escola Exemplo" in prompt
    assert "TEXTO CONTÍNUO" in prompt
    assert "NÃO utilize listas" in prompt
    for movement in ("Introdução", "Análise de Competências", "Perspectivas e Planejamento", "Recomendações Finais"):
        assert movement in prompt

    embedded = prompt[prompt.index("{"):]
    assert json.loads(embedded) == payload


def test_generate_returns_model_text_with_one_call(small_form, fill, scale):
    completions = _FakeCompletions(content="## Relatório\nTexto em prosa.")
    generator = ReportGenerator(_settings(), scale, client=_FakeClient(completions))

    report = generator.generate(fill(small_form))

    assert report == "## Relatório\nTexto em prosa."
    assert len(completions.calls) == 1
    call = completions.calls[0]
    assert call["model"] == "gpt-test"
    assert call["messages"][-1]["role"] == "user"
    assert "Maria Souza" in call["messages"][-1]["content"]


@pytest.mark.parametrize("content", [None, "", "   \n"])
def test_generate_falls_back_on_empty_response(small_form, scale, content):
    generator = ReportGenerator(_settings(), scale, client=_FakeClient(_FakeCompletions(content=content)))
    assert generator.generate(small_form) == EMPTY_REPORT_FALLBACK


def test_generate_wraps_service_failures(small_form, scale):
    """Any client error surfaces as a single ReportGenerationError, no retry."""
    completions = _FakeCompletions(error=ConnectionError("network down"))
    generator = ReportGenerator(_settings(), scale, client=_FakeClient(completions))

    with pytest.raises(ReportGenerationError) as excinfo:
        generator.generate(small_form)

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert len(completions.calls) == 1


def test_generate_without_api_key_fails_cleanly(small_form, scale):
    generator = ReportGenerator(_settings(openai_api_key=None), scale)
    with pytest.raises(ReportGenerationError):
        generator.generate(small_form)
