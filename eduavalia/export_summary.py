"""Build exportable assessment summaries and the printable report document."""

from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from typing import Any

from eduavalia.models import FormState, PersonalInfo, RatingItem, RatingScale
from eduavalia.report_renderer import blocks_to_html, render_blocks
from eduavalia.validation import is_item_valid, progress, section_stats


def _generated_at() -> str:
    generated_at = datetime.now(timezone.utc).replace(microsecond=0).isoformat()
    return generated_at.replace("+00:00", "Z")


def build_assessment_export_summary(
    form: FormState,
    scale: RatingScale,
    report: str,
    institution: str,
) -> dict[str, Any]:
    """Create a portable summary with answers, completion and the report text."""
    info = form.personal_info
    section_entries: list[dict[str, Any]] = []

    for section in form.sections:
        stats = section_stats(section)
        items: list[dict[str, Any]] = []
        for item in section.items:
            entry: dict[str, Any] = {
                "id": item.id,
                "question": item.question,
                "complete": is_item_valid(item),
            }
            if isinstance(item, RatingItem):
                entry["rating"] = item.rating
                entry["ratingLabel"] = scale.label_for(item.rating)
                entry["comment"] = item.comment
            else:
                entry["answer"] = item.answer
            items.append(entry)

        section_entries.append({
            "id": section.id,
            "title": section.title,
            "kind": section.kind,
            "completed": stats.completed,
            "total": stats.total,
            "items": items,
        })

    return {
        "generatedAt": _generated_at(),
        "institution": institution,
        "personalInfo": {
            "name": info.name,
            "date": info.date,
            "subjectContext": info.subject_context,
        },
        "progress": progress(form),
        "sections": section_entries,
        "report": report,
    }


def summary_to_json(summary: dict[str, Any]) -> str:
    """Serialize export summary to pretty JSON."""
    return json.dumps(summary, indent=2, ensure_ascii=False)


def summary_to_markdown(summary: dict[str, Any]) -> str:
    """Render export summary in markdown for human-friendly sharing."""
    info = summary.get("personalInfo", {})
    lines = [
        f"# Autoavaliação - {summary.get('institution', '')}",
        "",
        f"- Auxiliar: {info.get('name', '')}",
        f"- Data: {info.get('date', '')}",
        f"- Aluno / transtorno: {info.get('subjectContext', '')}",
        f"- Progresso: {summary.get('progress', 0)}%",
        f"- Gerado em: {summary.get('generatedAt', '')}",
    ]

    for section in summary.get("sections", []):
        lines += [
            "",
            f"## {section.get('title', '')} ({section.get('completed', 0)}/{section.get('total', 0)})",
        ]
        for item in section.get("items", []):
            lines.append(f"- **{item.get('question', '')}**")
            if "rating" in item:
                rating = item.get("rating")
                if rating is None:
                    lines.append("  - Nota: sem resposta")
                else:
                    lines.append(f"  - Nota: {rating} ({item.get('ratingLabel', '')})")
                if item.get("comment"):
                    lines.append(f"  - Comentário: {item['comment']}")
            else:
                lines.append(f"  - Resposta: {item.get('answer') or 'sem resposta'}")

    report = summary.get("report", "")
    if report:
        lines += ["", "## Relatório", "", report.strip()]

    return "\n".join(lines).strip() + "\n"


_PRINT_CSS = """
body { font-family: Georgia, 'Times New Roman', serif; color: #1e293b; max-width: 48rem;
       margin: 2rem auto; line-height: 1.6; text-align: justify; }
header { border-bottom: 2px solid #4f46e5; margin-bottom: 1.5rem; }
header .institution { text-transform: uppercase; letter-spacing: 0.08em; font-size: 0.8rem; color: #6366f1; }
h1 { margin: 0.2rem 0 0.5rem 0; }
h2 { color: #3730a3; border-bottom: 1px solid #e0e7ff; padding-bottom: 0.3rem; }
h3 { color: #4338ca; }
strong.lead { display: block; margin-top: 0.8rem; }
.meta { color: #64748b; font-size: 0.9rem; }
"""


def report_to_printable_html(report: str, institution: str, personal_info: PersonalInfo) -> str:
    """Render the report as a standalone HTML page the browser can print or save as PDF."""
    body = blocks_to_html(render_blocks(report))
    esc = html.escape
    return (
        "<!DOCTYPE html>\n"
        '<html lang="pt-BR">\n<head>\n<meta charset="utf-8">\n'
        "<title>Relatório de Desempenho</title>\n"
        f"<style>{_PRINT_CSS}</style>\n</head>\n<body>\n"
        "<header>\n"
        f'<div class="institution">{esc(institution)}</div>\n'
        "<h1>Relatório de Desempenho</h1>\n"
        f'<p class="meta">{esc(personal_info.name)} · {esc(personal_info.date)}'
        f" · {esc(personal_info.subject_context)}</p>\n"
        "</header>\n"
        f"<main>\n{body}\n</main>\n"
        "</body>\n</html>\n"
    )
