"""Wizard state and its transitions.

Every function here takes a ``WizardState`` and returns a new one; nothing is
mutated in place. The Streamlit pages keep the current state in
``st.session_state.wizard`` and swap it for whatever a transition returns.

Incomplete steps never raise. They set ``show_errors`` and park the wizard in an
awaiting-confirmation state (``pending``) until the user either confirms the
override or cancels.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Optional

from eduavalia.models import PERSONAL_FIELDS, RATING_VALUES, FormState, RatingItem, TextItem, is_rating_value
from eduavalia.report_service import ReportGenerationError
from eduavalia.validation import is_step_valid, progress

logger = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

PENDING_ADVANCE = "advance"
PENDING_SUBMIT = "submit"

_NON_NUMERIC_RE = re.compile(r"[^0-9.,]")
_DIGIT_RE = re.compile(r"[0-9]")


@dataclass(frozen=True)
class WizardState:
    form: FormState
    step: int = 0
    show_errors: bool = False
    pending: Optional[str] = None
    status: str = STATUS_IDLE
    report: str = ""
    scroll_to_top: bool = False

    @property
    def last_step(self) -> int:
        return len(self.form.sections)

    @property
    def is_terminal_step(self) -> bool:
        return self.step == self.last_step

    @property
    def awaiting_confirmation(self) -> bool:
        return self.pending is not None


# ── Field edits ──────────────────────────────────────────────────────────────

def set_personal_field(state: WizardState, name: str, value: str) -> WizardState:
    if name not in PERSONAL_FIELDS:
        raise KeyError(f"Unknown personal info field: {name}")
    info = replace(state.form.personal_info, **{name: value})
    return replace(state, form=replace(state.form, personal_info=info))


def _update_item(state: WizardState, section_index: int, item_id: str, **changes) -> WizardState:
    section = state.form.sections[section_index]
    item = section.items[section.index_of(item_id)]
    section = section.replace_item(replace(item, **changes))
    return replace(state, form=state.form.replace_section(section_index, section))


def _item(state: WizardState, section_index: int, item_id: str):
    section = state.form.sections[section_index]
    return section.items[section.index_of(item_id)]


def set_rating(state: WizardState, section_index: int, item_id: str, rating: Optional[int]) -> WizardState:
    if rating is not None and not is_rating_value(rating):
        raise ValueError(f"Rating must be one of {RATING_VALUES}, got {rating!r}")
    if not isinstance(_item(state, section_index, item_id), RatingItem):
        raise TypeError(f"Item {item_id!r} is not a rating item")
    return _update_item(state, section_index, item_id, rating=rating)


def set_comment(state: WizardState, section_index: int, item_id: str, comment: str) -> WizardState:
    if not isinstance(_item(state, section_index, item_id), RatingItem):
        raise TypeError(f"Item {item_id!r} is not a rating item")
    return _update_item(state, section_index, item_id, comment=comment)


def set_answer(state: WizardState, section_index: int, item_id: str, answer: str) -> WizardState:
    item = _item(state, section_index, item_id)
    if not isinstance(item, TextItem):
        raise TypeError(f"Item {item_id!r} is not a text item")
    if item.is_numeric:
        answer = _NON_NUMERIC_RE.sub("", answer).strip()
        # Separators alone are not a number
        if not _DIGIT_RE.search(answer):
            answer = ""
    return _update_item(state, section_index, item_id, answer=answer)


# ── Navigation ───────────────────────────────────────────────────────────────

def _clear_failure(state: WizardState) -> str:
    # A failed generation only matters on the step it was submitted from
    return STATUS_IDLE if state.status == STATUS_ERROR else state.status


def _advance(state: WizardState) -> WizardState:
    return replace(
        state,
        step=state.step + 1,
        show_errors=False,
        pending=None,
        status=_clear_failure(state),
        scroll_to_top=True,
    )


def next_step(state: WizardState) -> WizardState:
    """Advance one step, or ask for confirmation when the step is incomplete."""
    if state.is_terminal_step:
        return state
    if is_step_valid(state.form, state.step):
        return _advance(state)
    logger.info("Step %d incomplete, awaiting override confirmation", state.step)
    return replace(state, show_errors=True, pending=PENDING_ADVANCE)


def prev_step(state: WizardState) -> WizardState:
    if state.step == 0:
        return state
    return replace(
        state,
        step=state.step - 1,
        show_errors=False,
        pending=None,
        status=_clear_failure(state),
        scroll_to_top=True,
    )


def _start_generation(state: WizardState) -> WizardState:
    return replace(state, status=STATUS_LOADING, pending=None, scroll_to_top=True)


def request_submit(state: WizardState) -> WizardState:
    """Submit from the terminal step; incomplete forms need an explicit override."""
    if not state.is_terminal_step or state.status == STATUS_LOADING:
        return state
    pct = progress(state.form)
    if pct < 100:
        logger.info("Submit requested at %d%% progress, awaiting override confirmation", pct)
        return replace(state, show_errors=True, pending=PENDING_SUBMIT, scroll_to_top=True)
    return _start_generation(state)


def confirm(state: WizardState) -> WizardState:
    """Resolve the pending confirmation by proceeding anyway."""
    if state.pending == PENDING_ADVANCE:
        logger.info("User overrode validation on step %d", state.step)
        return _advance(state)
    if state.pending == PENDING_SUBMIT:
        logger.info("User requested report for an incomplete form")
        return _start_generation(state)
    return state


def cancel(state: WizardState) -> WizardState:
    return replace(state, pending=None)


def acknowledge_scroll(state: WizardState) -> WizardState:
    if not state.scroll_to_top:
        return state
    return replace(state, scroll_to_top=False)


# ── Report lifecycle ─────────────────────────────────────────────────────────

def complete_report(state: WizardState, text: str) -> WizardState:
    return replace(state, status=STATUS_SUCCESS, report=text, show_errors=False)


def fail_report(state: WizardState) -> WizardState:
    return replace(state, status=STATUS_ERROR, report="")


def run_report(state: WizardState, generate: Callable[[FormState], str]) -> WizardState:
    """Call ``generate`` once for a loading wizard and record success or failure."""
    if state.status != STATUS_LOADING:
        return state
    try:
        text = generate(state.form)
    except ReportGenerationError:
        # The generator already logged the cause
        return fail_report(state)
    return complete_report(state, text)


def return_to_form(state: WizardState) -> WizardState:
    """Discard the generated report and go back to the first step, keeping answers."""
    return replace(
        state,
        status=STATUS_IDLE,
        report="",
        step=0,
        show_errors=False,
        pending=None,
        scroll_to_top=True,
    )
