"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List

import gradio as gr

from ...config import EXTRACTION_STRATEGIES
from ...errors import RhymeSuffixError
from ...utils.observability import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..app import RhymeSuffixApp

_logger = get_logger(__name__).bind(component="gradio_ui")

_SUFFIX_SEPARATORS = re.compile(r"[\s,;]+")


def split_suffix_input(text: str) -> List[str]:
    """Split free-form textbox input into suffix tokens."""

    if not text:
        return []
    return [part for part in _SUFFIX_SEPARATORS.split(text) if part]


def run_search(app: "RhymeSuffixApp", text: str, limit: float, strategy: str) -> str:
    """Execute a search for the UI and return markdown."""

    suffixes = split_suffix_input(text)
    if not suffixes:
        return "Please enter at least one suffix (e.g. `ando endo`)."

    try:
        result = app.search(suffixes, limit=int(limit), strategy=strategy or None)
    except RhymeSuffixError as exc:
        _logger.warning("UI search failed", context={"error": str(exc)})
        return f"Search failed: {exc}"

    return app.format_markdown(result)


def create_interface(app: "RhymeSuffixApp") -> gr.Blocks:
    """Construct the Gradio Blocks UI around ``app``."""

    def search_interface(text: str, limit: float, strategy: str) -> str:
        return run_search(app, text, limit, strategy)

    with gr.Blocks(title="Rhyme Suffix Finder") as interface:
        gr.Markdown(
            "## Rhyme Suffix Finder\n"
            "Spanish words ending in each suffix, most common first."
        )
        with gr.Row():
            with gr.Column(scale=1):
                suffix_input = gr.Textbox(
                    label="Suffixes",
                    placeholder="ando endo ción (up to 5)",
                    lines=1,
                )
                limit_slider = gr.Slider(
                    minimum=1,
                    maximum=100,
                    value=app.settings.default_limit,
                    step=1,
                    label="Words per suffix",
                )
                strategy_radio = gr.Radio(
                    choices=list(EXTRACTION_STRATEGIES),
                    value=app.settings.strategy,
                    label="Extraction strategy",
                )
                search_btn = gr.Button("Find rhymes", variant="primary")
            with gr.Column(scale=2):
                results_md = gr.Markdown("Enter suffixes and click **Find rhymes**.")

        inputs = [suffix_input, limit_slider, strategy_radio]
        search_btn.click(fn=search_interface, inputs=inputs, outputs=results_md)
        suffix_input.submit(fn=search_interface, inputs=inputs, outputs=results_md)

    return interface


__all__ = ["create_interface", "run_search", "split_suffix_input"]
