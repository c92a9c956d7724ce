"""Tests for assessment export summary generation."""

import json

from eduavalia.export_summary import (
    build_assessment_export_summary,
    report_to_printable_html,
    summary_to_json,
    summary_to_markdown,
)
from eduavalia.models import PersonalInfo


def test_build_assessment_export_summary_includes_expected_sections(small_form, fill, scale):
    """Summary carries personal info, per-section stats, answers and the report."""
    summary = build_assessment_export_summary(fill(small_form), scale, "## Relatório\nTexto.", "Escola Exemplo")

    assert summary["institution"] == "Escola Exemplo"
    assert summary["personalInfo"] == {"name": "Maria Souza", "date": "2025-11-20", "subjectContext": "TEA"}
    assert summary["progress"] == 100
    assert summary["generatedAt"].endswith("Z")

    ratings, texts = summary["sections"]
    assert (ratings["completed"], ratings["total"]) == (2, 2)
    assert ratings["items"][0]["ratingLabel"] == "Bom"
    assert texts["items"][1] == {"id": "2.2", "question": "2.2 Horas/mês", "complete": True, "answer": "6"}
    assert summary["report"].startswith("## Relatório")


def test_incomplete_items_are_flagged(small_form, scale):
    summary = build_assessment_export_summary(small_form, scale, "", "Escola Exemplo")
    item = summary["sections"][0]["items"][0]
    assert item["complete"] is False
    assert item["rating"] is None
    assert item["ratingLabel"] is None


def test_summary_to_markdown_renders_key_sections(small_form, fill, scale):
    """Markdown formatter renders sections, answers and the report."""
    summary = build_assessment_export_summary(fill(small_form), scale, "Texto do relatório.", "Escola Exemplo")

    markdown = summary_to_markdown(summary)

    assert markdown.startswith("# Autoavaliação - Escola Exemplo")
    assert "## Seção 1: Conhecimento (2/2)" in markdown
    assert "Nota: 4 (Bom)" in markdown
    assert "Resposta: 6" in markdown
    assert "## Relatório" in markdown
    assert "Texto do relatório." in markdown


def test_summary_to_json_keeps_accents(small_form, scale):
    summary = build_assessment_export_summary(small_form, scale, "", "Centro de Educação")
    raw = summary_to_json(summary)
    assert "Educação" in raw
    assert json.loads(raw)["institution"] == "Centro de Educação"


def test_printable_html_contains_rendered_report():
    info = PersonalInfo(name="Maria <Souza>", date="2025-11-20", subject_context="TEA")
    document = report_to_printable_html("## Introdução\n- ponto em lista", "Escola Exemplo", info)

    assert document.startswith("<!DOCTYPE html>")
    assert "<h2>Introdução</h2>" in document
    assert "<p>ponto em lista</p>" in document
    assert "Maria &lt;Souza&gt;" in document
    assert "Escola Exemplo" in document
