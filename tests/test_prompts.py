from __future__ import annotations

import pytest

from healthtranslate.services.prompts import build_prompt, language_name


def test_translate_prompt_asks_for_translation_only() -> None:
    prompt = build_prompt("translate", "Hello", "es")
    assert prompt == 'Translate to Spanish. Output ONLY the translation:\n\n"""Hello"""'


def test_summarize_prompt_asks_for_short_summary() -> None:
    prompt = build_prompt("summarize", "Long text", "en")
    assert prompt.startswith("Summarize in 3-5 sentences. Output ONLY the summary:")
    assert prompt.endswith('"""Long text"""')


def test_tasks_differ_only_in_instruction() -> None:
    text = "The patient reports chest pain\nsince yesterday."
    translate = build_prompt("translate", text, "French")
    summarize = build_prompt("summarize", text, "French")

    assert translate != summarize
    assert translate.split("\n\n", 1)[1] == summarize.split("\n\n", 1)[1] == f'"""{text}"""'


def test_missing_target_language_defaults_to_english() -> None:
    assert build_prompt("translate", "Hola", None).startswith("Translate to English.")
    assert build_prompt("translate", "Hola", "   ").startswith("Translate to English.")


def test_unknown_codes_pass_through() -> None:
    assert language_name("Portuguese") == "Portuguese"
    assert language_name("AR") == "Arabic"


def test_same_inputs_same_prompt() -> None:
    assert build_prompt("translate", "x", "de") == build_prompt("translate", "x", "de")


def test_unknown_task_rejected() -> None:
    with pytest.raises(ValueError):
        build_prompt("paraphrase", "x", "de")
