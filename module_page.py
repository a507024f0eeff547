# module_page.py
from __future__ import annotations

from typing import Iterable

import streamlit as st

from module_templates import ModuleSection, ModuleTemplate
from theme import page_header, status_chip


def _bullets(title: str, items: Iterable[str], numbered: bool = False) -> None:
    items = list(items)
    if not items:
        return
    st.markdown(f"#### {title}")
    lines = [f"{i}. {text}" if numbered else f"- {text}" for i, text in enumerate(items, start=1)]
    st.markdown("\n".join(lines))


def _render_section(section: ModuleSection) -> None:
    with st.expander(section.title, expanded=False):
        if section.what_it_does:
            st.write(section.what_it_does)
        _bullets("Prerequisites", section.prerequisites)
        _bullets("Process", section.process, numbered=True)
        _bullets("Outputs", section.outputs)


def render_module(template: ModuleTemplate) -> None:
    """Placeholder page for a feature that is not built yet."""
    st.markdown(page_header(template.name, template.description), unsafe_allow_html=True)
    st.markdown(status_chip(template.status_label, template.status_color), unsafe_allow_html=True)

    if template.what_it_does:
        st.markdown("#### What it does")
        st.write(template.what_it_does)
    _bullets("Prerequisites", template.prerequisites)
    _bullets("Process", template.process_steps, numbered=True)
    _bullets("Outputs", template.outputs)
    _bullets("Expected features", template.expected_features)

    for section in template.sections:
        _render_section(section)
