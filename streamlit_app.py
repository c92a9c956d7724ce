"""Main Streamlit app for the EduAvalia self-assessment."""
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent))
from eduavalia import navigator as nav
from eduavalia.config import load_settings
from eduavalia.data_loader import DataLoadError, QuestionnaireLoader
from eduavalia.report_service import ReportGenerator
from eduavalia.ui_utils import inject_custom_css, render_progress_bar
from eduavalia.validation import progress, section_stats

# ── Secrets ──────────────────────────────────────────────────────────────────
# Streamlit secrets only fill in what the environment does not already set
try:
    for _name in ("OPENAI_API_KEY", "EDUAVALIA_MODEL", "EDUAVALIA_INSTITUTION"):
        if _name in st.secrets:
            os.environ.setdefault(_name, str(st.secrets[_name]))
except FileNotFoundError:
    pass

settings = load_settings()

# ── Logging ───────────────────────────────────────────────────────────────────
# force=True overrides Streamlit's existing handlers so logs appear in the terminal
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

# ── Page config ──────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="EduAvalia",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "Get Help": None,
        "Report a bug": None,
        "About": f"EduAvalia – Autoavaliação para Auxiliares de Apoio · {settings.institution}",
    },
)

inject_custom_css()

# ── Data loader ──────────────────────────────────────────────────────────────
if st.session_state.get("loader") is None:
    try:
        st.session_state.loader = QuestionnaireLoader(settings.questionnaire_path)
        st.session_state.loader.validate()
        logger.info("QuestionnaireLoader initialized from %s", settings.questionnaire_path)
    except DataLoadError as e:
        st.session_state.loader = None
        st.error(f"Falha ao carregar o questionário: {e}")
        st.stop()

loader: QuestionnaireLoader = st.session_state.loader

# ── Session state defaults ───────────────────────────────────────────────────
if "wizard" not in st.session_state:
    st.session_state.wizard = nav.WizardState(form=loader.initial_form())
if "api_key_override" not in st.session_state:
    st.session_state.api_key_override = ""

state: nav.WizardState = st.session_state.wizard

effective_settings = settings
if not settings.has_api_key and st.session_state.api_key_override:
    effective_settings = replace(settings, openai_api_key=st.session_state.api_key_override)


def _remember_api_key():
    # Plain session key, so it survives runs where the sidebar is not drawn
    st.session_state.api_key_override = st.session_state.api_key_input


def render_sidebar(state: nav.WizardState):
    with st.sidebar:
        st.markdown("### 📝 EduAvalia")
        st.caption(settings.institution)
        st.markdown("---")

        pct = progress(state.form)
        render_progress_bar(pct)
        if state.show_errors and pct < 100:
            st.caption(":orange[Há campos obrigatórios pendentes.]")

        st.markdown("##### Seções")
        for idx, section in enumerate(state.form.sections, 1):
            stats = section_stats(section)
            mark = "✅" if stats.is_complete else "▫️"
            current = " ←" if state.step == idx else ""
            st.caption(f"{mark} {section.title} ({stats.completed}/{stats.total}){current}")

        st.markdown("---")
        if not settings.has_api_key:
            st.text_input(
                "OPENAI_API_KEY",
                value=st.session_state.api_key_override,
                type="password",
                key="api_key_input",
                on_change=_remember_api_key,
                help="Necessária para gerar o relatório. Não é armazenada.",
            )
        st.caption(f"Modelo: `{settings.model}`")


# ── Page routing ─────────────────────────────────────────────────────────────
if state.status == nav.STATUS_SUCCESS:
    from eduavalia.pages.report import render_report
    render_sidebar(state)
    render_report(loader, settings.institution)
else:
    from eduavalia.pages.form import render_form
    from eduavalia.pages.report import render_error, run_generation

    if state.status == nav.STATUS_ERROR:
        render_error()
    render_form(loader, settings.institution)
    # Drawn after the form so the counters include this run's edits
    render_sidebar(st.session_state.wizard)
    if st.session_state.wizard.status == nav.STATUS_LOADING:
        run_generation(ReportGenerator(effective_settings, loader.rating_scale))
