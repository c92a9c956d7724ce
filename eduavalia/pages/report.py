"""Report generation, display, printing and export."""
import html
import logging

import streamlit as st

from eduavalia import navigator as nav
from eduavalia.export_summary import (
    build_assessment_export_summary,
    report_to_printable_html,
    summary_to_json,
    summary_to_markdown,
)
from eduavalia.report_renderer import report_body_html
from eduavalia.report_service import ReportGenerator
from eduavalia.ui_utils import render_info_box, render_print_button

logger = logging.getLogger(__name__)


def run_generation(generator: ReportGenerator) -> None:
    """Call the text-generation service for a wizard in the loading state."""
    state: nav.WizardState = st.session_state.wizard
    if state.status != nav.STATUS_LOADING:
        return

    with st.spinner("Gerando relatório..."):
        state = nav.run_report(state, generator.generate)

    st.session_state.wizard = state
    st.rerun()


def render_error() -> None:
    """Shown above the form after a failed generation attempt."""
    render_info_box(
        "Falha ao gerar o relatório. Verifique sua conexão ou tente novamente.",
        "error",
    )


def render_report(loader, institution: str) -> None:
    """Render a generated report with print, export and return actions."""
    state: nav.WizardState = st.session_state.wizard
    info = state.form.personal_info

    st.markdown(
        '<div class="report-banner">'
        f'<div class="institution">{html.escape(institution)}</div>'
        "<h1>Relatório de Desempenho</h1>"
        "<div>Gerado por IA com base em sua autoavaliação.</div>"
        "</div>",
        unsafe_allow_html=True,
    )

    st.html(report_body_html(state.report))

    st.markdown("---")
    document = report_to_printable_html(state.report, institution, info)
    summary = build_assessment_export_summary(state.form, loader.rating_scale, state.report, institution)
    file_stem = f"relatorio-{info.date or 'sem-data'}"

    col_print, col_html, col_md, col_json = st.columns(4)
    with col_print:
        render_print_button(document)
    with col_html:
        st.download_button(
            "Baixar HTML",
            data=document,
            file_name=f"{file_stem}.html",
            mime="text/html",
            use_container_width=True,
        )
    with col_md:
        st.download_button(
            "Baixar Markdown",
            data=summary_to_markdown(summary),
            file_name=f"{file_stem}.md",
            mime="text/markdown",
            use_container_width=True,
        )
    with col_json:
        st.download_button(
            "Baixar JSON",
            data=summary_to_json(summary),
            file_name=f"{file_stem}.json",
            mime="application/json",
            use_container_width=True,
        )

    if st.button("Voltar ao Formulário", use_container_width=True, key="report_back"):
        logger.info("Report discarded, returning to form")
        st.session_state.wizard = nav.return_to_form(state)
        st.rerun()
