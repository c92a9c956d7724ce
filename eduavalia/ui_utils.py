"""UI utilities and styling for Streamlit app."""
import html
import json
from typing import List

import streamlit as st
import streamlit.components.v1 as components

from eduavalia.validation import SectionStats


def inject_custom_css():
    """Inject custom CSS for a clean, modern UI."""
    st.markdown("""
    <style>
    /* ---------- Global ---------- */
    .main { padding-top: 1.5rem; }
    section[data-testid="stSidebar"] > div:first-child { padding-top: 1rem; }

    /* ---------- Typography ---------- */
    h1 { font-weight: 700; letter-spacing: -0.02em; }
    h2 { font-weight: 600; margin-top: 1.5rem; }
    h3 { font-weight: 600; }

    /* ---------- Buttons ---------- */
    .stButton > button {
        border-radius: 8px;
        font-weight: 600;
        transition: all 0.2s ease;
    }
    .stButton > button:hover {
        transform: translateY(-1px);
        box-shadow: 0 2px 8px rgba(0,0,0,0.12);
    }

    /* ---------- Step indicator ---------- */
    .step-bar {
        display: flex;
        align-items: center;
        gap: 0;
        margin: 1rem 0 1.5rem 0;
    }
    .step-item {
        display: flex;
        flex-direction: column;
        align-items: center;
        flex: 1;
        position: relative;
    }
    .step-circle {
        width: 36px; height: 36px;
        border-radius: 50%;
        display: flex; align-items: center; justify-content: center;
        font-weight: 700; font-size: 0.85rem;
        z-index: 2;
        transition: all 0.25s ease;
    }
    .step-circle.done   { background: #22c55e; color: #fff; }
    .step-circle.active { background: #4f46e5; color: #fff; box-shadow: 0 0 0 4px rgba(79,70,229,0.2); }
    .step-circle.future { background: #e5e7eb; color: #9ca3af; }
    .step-label {
        margin-top: 6px;
        font-size: 0.75rem;
        font-weight: 600;
        text-align: center;
        white-space: nowrap;
    }
    .step-label.active { color: #4f46e5; }
    .step-label.done   { color: #22c55e; }
    .step-label.future { color: #9ca3af; }
    .step-connector {
        flex: 1; height: 3px;
        margin-top: -18px;
        z-index: 1;
    }
    .step-connector.done   { background: #22c55e; }
    .step-connector.future { background: #e5e7eb; }

    /* ---------- Question cards ---------- */
    .q-card {
        background: #f8fafc;
        border: 1px solid #e2e8f0;
        border-radius: 12px;
        padding: 0.9rem 1.25rem;
        margin: 1.25rem 0 0.5rem 0;
    }
    .q-card.answered { border-left: 4px solid #22c55e; }
    .q-card.missing  { background: #fef2f2; border-color: #fecaca; border-left: 4px solid #ef4444; }
    .q-card .q-title { font-weight: 600; color: #1e293b; }
    .q-card.missing .q-title { color: #991b1b; }
    .q-card .q-required {
        font-size: 0.72rem;
        font-weight: 700;
        color: #dc2626;
        text-transform: uppercase;
        letter-spacing: 0.05em;
    }

    /* ---------- Section header ---------- */
    .section-head {
        display: flex; justify-content: space-between; align-items: center;
        gap: 1rem; margin-bottom: 0.25rem;
    }
    .section-count { font-size: 0.8rem; color: #64748b; white-space: nowrap; }
    .section-count.complete { color: #15803d; font-weight: 700; }

    /* ---------- Report ---------- */
    .report-banner {
        background: #4f46e5;
        color: #fff;
        border-radius: 12px;
        padding: 1.5rem 2rem;
        margin-bottom: 1.5rem;
    }
    .report-banner .institution {
        font-size: 0.8rem; font-weight: 600; text-transform: uppercase;
        letter-spacing: 0.1em; color: #c7d2fe;
    }
    .report-body { text-align: justify; line-height: 1.7; color: #334155; }
    .report-body h2 { color: #3730a3; border-bottom: 1px solid #e0e7ff; padding-bottom: 0.4rem; }
    .report-body h3 { color: #4338ca; }
    .report-body strong.lead { display: block; margin-top: 0.75rem; color: #0f172a; }
    </style>
    """, unsafe_allow_html=True)


# ---------------------------------------------------------------------------
# Step indicator
# ---------------------------------------------------------------------------

def render_step_indicator(steps: List[str], current: int):
    """Render a horizontal step indicator. `current` is 0-based."""
    parts: list[str] = []
    parts.append('<div class="step-bar">')
    for i, label in enumerate(steps):
        if i < current:
            cls = "done"
            icon = "&#10003;"
        elif i == current:
            cls = "active"
            icon = str(i + 1)
        else:
            cls = "future"
            icon = str(i + 1)
        parts.append(
            f'<div class="step-item">'
            f'<div class="step-circle {cls}">{icon}</div>'
            f'<div class="step-label {cls}">{html.escape(label)}</div>'
            f'</div>'
        )
        if i < len(steps) - 1:
            conn_cls = "done" if i < current else "future"
            parts.append(f'<div class="step-connector {conn_cls}"></div>')
    parts.append("</div>")
    st.markdown("".join(parts), unsafe_allow_html=True)


# ---------------------------------------------------------------------------
# Progress and section headers
# ---------------------------------------------------------------------------

def render_progress_bar(percent: int, label: str = "Progresso Global"):
    st.progress(percent / 100)
    st.caption(f"{label}: {percent}%")


def render_section_header(title: str, description: str, stats: SectionStats):
    """Section title with its own completion counter."""
    count_cls = "section-count complete" if stats.is_complete else "section-count"
    mark = "&#10003; " if stats.is_complete else ""
    st.markdown(
        f'<div class="section-head"><h3>{html.escape(title)}</h3>'
        f'<span class="{count_cls}">{mark}{stats.completed} de {stats.total}</span></div>',
        unsafe_allow_html=True,
    )
    st.progress(stats.percent / 100)
    if description:
        st.caption(description)


def render_question_card(question: str, *, answered: bool, missing: bool):
    if missing:
        css_cls = "missing"
        flag = '<div class="q-required">Obrigatório</div>'
    else:
        css_cls = "answered" if answered else ""
        flag = ""
    st.markdown(
        f'<div class="q-card {css_cls}">'
        f'<div class="q-title">{html.escape(question)}</div>{flag}'
        f'</div>',
        unsafe_allow_html=True,
    )


def render_info_box(message: str, type: str = "info"):
    icon_map = {"info": "ℹ️", "success": "✅", "warning": "⚠️", "error": "❌"}
    icon = icon_map.get(type, "ℹ️")
    fn = {"info": st.info, "success": st.success, "warning": st.warning, "error": st.error}.get(type, st.info)
    fn(f"{icon} {message}")


# ---------------------------------------------------------------------------
# Browser helpers (run inside a zero-height component iframe)
# ---------------------------------------------------------------------------

def scroll_to_top():
    components.html(
        "<script>window.parent.document.querySelector('section.main, .main')"
        "?.scrollTo({top: 0, behavior: 'smooth'});"
        "window.parent.scrollTo({top: 0, behavior: 'smooth'});</script>",
        height=0,
    )


def render_print_button(document_html: str, label: str = "Imprimir / Salvar PDF"):
    """Button that opens the report document in a new window and prints it."""
    payload = json.dumps(document_html).replace("</", "<\\/")
    components.html(
        f"""
        <button id="print-report" style="width:100%;padding:0.55rem 1rem;border-radius:8px;
            border:none;background:#1e293b;color:#fff;font-weight:600;cursor:pointer;
            font-family:sans-serif;">{html.escape(label)}</button>
        <script>
        document.getElementById('print-report').addEventListener('click', function () {{
            const win = window.open('', '_blank');
            win.document.write({payload});
            win.document.close();
            win.focus();
            win.print();
        }});
        </script>
        """,
        height=48,
    )
