"""Wizard-style questionnaire page."""
import logging
from datetime import date

import streamlit as st

from eduavalia import navigator as nav
from eduavalia.models import RatingItem, Section
from eduavalia.ui_utils import (
    render_info_box,
    render_question_card,
    render_section_header,
    render_step_indicator,
    scroll_to_top,
)
from eduavalia.validation import invalid_fields, is_item_valid, section_stats

logger = logging.getLogger(__name__)

PERSONAL_STEP_LABEL = "Identificação"

_CONFIRM_MESSAGES = {
    nav.PENDING_ADVANCE: (
        "Existem campos obrigatórios não preenchidos nesta etapa. Deseja avançar mesmo assim?",
        "Avançar mesmo assim",
    ),
    nav.PENDING_SUBMIT: (
        "Existem campos obrigatórios não preenchidos (destacados em vermelho). "
        "Deseja gerar o relatório incompleto mesmo assim?",
        "Gerar mesmo assim",
    ),
}


def _commit(state: nav.WizardState) -> None:
    logger.debug("Wizard step=%d status=%s pending=%s", state.step, state.status, state.pending)
    st.session_state.wizard = state
    st.rerun()


def step_labels(state: nav.WizardState) -> list:
    return [PERSONAL_STEP_LABEL] + [f"Seção {idx}" for idx in range(1, len(state.form.sections) + 1)]


# ── Step renderers ───────────────────────────────────────────────────────────

def _parse_iso(value: str):
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def _step_personal_info(state: nav.WizardState, loader, institution: str) -> nav.WizardState:
    """Step 0 – who is assessing themselves, and in which context."""
    st.caption(institution.upper())
    st.title(loader.title or "Autoavaliação")
    if loader.introduction:
        st.markdown(loader.introduction)

    info = state.form.personal_info
    missing = set(invalid_fields(state.form, 0)) if state.show_errors else set()

    col1, col2, col3 = st.columns(3)
    with col1:
        name = st.text_input(
            "Nome do Auxiliar",
            value=info.name,
            placeholder="Seu nome completo",
            key="pi_name",
        )
        if "name" in missing:
            st.caption(":red[Obrigatório]")
    with col2:
        picked = st.date_input(
            "Data",
            value=_parse_iso(info.date),
            format="DD/MM/YYYY",
            key="pi_date",
        )
        if "date" in missing:
            st.caption(":red[Obrigatório]")
    with col3:
        context = st.text_input(
            "Transtorno do Aluno",
            value=info.subject_context,
            placeholder="Ex: TEA, TDAH, etc.",
            key="pi_context",
        )
        if "subject_context" in missing:
            st.caption(":red[Obrigatório]")

    picked_iso = picked.isoformat() if picked else ""
    if name != info.name:
        state = nav.set_personal_field(state, "name", name)
    if picked_iso != info.date:
        state = nav.set_personal_field(state, "date", picked_iso)
    if context != info.subject_context:
        state = nav.set_personal_field(state, "subject_context", context)
    return state


def _parse_number(answer: str):
    try:
        return float(answer.replace(",", "."))
    except ValueError:
        return None


def _rating_widget(state, scale, section_index: int, section: Section, item: RatingItem, missing: bool):
    values = [level.value for level in scale]
    current = values.index(item.rating) if item.rating in values else None
    selected = st.radio(
        "Nota",
        options=values,
        index=current,
        horizontal=True,
        key=f"rt_{section.id}_{item.id}",
        label_visibility="collapsed",
    )
    level = scale.get(selected)
    if level:
        st.caption(f"**{level.label}** · {level.description}")
    elif missing:
        st.caption(":red[Selecione uma nota]")
    else:
        st.caption("Selecione uma nota")

    comment = st.text_area(
        "Comentários / Exemplos:",
        value=item.comment,
        placeholder=item.comment_placeholder or "Descreva situações reais que justifiquem sua avaliação...",
        key=f"cm_{section.id}_{item.id}",
    )

    if selected != item.rating:
        state = nav.set_rating(state, section_index, item.id, selected)
    if comment != item.comment:
        state = nav.set_comment(state, section_index, item.id, comment)
    return state


def _text_widget(state, section_index: int, section: Section, item, missing: bool):
    if item.description:
        st.caption(f"*{item.description}*")
    key = f"tx_{section.id}_{item.id}"
    if item.is_numeric:
        number = st.number_input(
            "Sua resposta (apenas números):",
            value=_parse_number(item.answer),
            min_value=0.0,
            step=1.0,
            format="%g",
            placeholder="Ex: 4",
            key=key,
        )
        answer = "" if number is None else f"{number:g}"
    else:
        answer = st.text_area(
            "Sua resposta:",
            value=item.answer,
            placeholder="Escreva aqui...",
            key=key,
        )
    if missing:
        st.caption(":red[Preenchimento obrigatório]")

    if answer != item.answer:
        state = nav.set_answer(state, section_index, item.id, answer)
    return state


def _step_section(state: nav.WizardState, scale, section_index: int) -> nav.WizardState:
    """Steps 1..N – one questionnaire section per step."""
    section = state.form.sections[section_index]
    render_section_header(section.title, section.description, section_stats(section))

    for item in section.items:
        missing = state.show_errors and not is_item_valid(item)
        render_question_card(item.question, answered=is_item_valid(item), missing=missing)
        if isinstance(item, RatingItem):
            state = _rating_widget(state, scale, section_index, section, item, missing)
        else:
            state = _text_widget(state, section_index, section, item, missing)
    return state


# ── Confirmation and navigation ──────────────────────────────────────────────

def _render_confirmation(state: nav.WizardState) -> None:
    message, proceed_label = _CONFIRM_MESSAGES[state.pending]
    render_info_box(message, "warning")
    col_cancel, col_go = st.columns(2)
    with col_cancel:
        if st.button("Cancelar", use_container_width=True, key="confirm_cancel"):
            _commit(nav.cancel(state))
    with col_go:
        if st.button(proceed_label, type="primary", use_container_width=True, key="confirm_proceed"):
            _commit(nav.confirm(state))


def _render_navigation(state: nav.WizardState) -> None:
    st.markdown("---")
    col_left, _, col_right = st.columns([1, 2, 1])
    busy = state.status == nav.STATUS_LOADING or state.awaiting_confirmation

    with col_left:
        if st.button("← Anterior", use_container_width=True, disabled=state.step == 0 or busy, key="nav_prev"):
            _commit(nav.prev_step(state))

    with col_right:
        if not state.is_terminal_step:
            if st.button("Próximo →", type="primary", use_container_width=True, disabled=busy, key="nav_next"):
                _commit(nav.next_step(state))
        else:
            label = "Processando..." if state.status == nav.STATUS_LOADING else "Gerar Relatório"
            if st.button(label, type="primary", use_container_width=True, disabled=busy, key="nav_submit"):
                _commit(nav.request_submit(state))


# ── Main renderer ────────────────────────────────────────────────────────────

def render_form(loader, institution: str) -> None:
    """Render the current wizard step with its navigation controls."""
    state: nav.WizardState = st.session_state.wizard

    if state.scroll_to_top:
        scroll_to_top()
        state = nav.acknowledge_scroll(state)

    st.caption(f"Etapa {state.step + 1} de {state.form.total_steps}")
    render_step_indicator(step_labels(state), state.step)

    if state.step == 0:
        state = _step_personal_info(state, loader, institution)
    else:
        state = _step_section(state, loader.rating_scale, state.step - 1)

    # Edits are stored before any button below reads the state
    st.session_state.wizard = state

    if state.awaiting_confirmation:
        st.markdown("---")
        _render_confirmation(state)

    _render_navigation(state)
