import pytest

from utility.prompt_manager import PromptManager


def test_language_codes_are_expanded():
    prompt = PromptManager.build_translation_prompt("Good morning", "en", "ja")
    assert "from English into Japanese" in prompt
    assert '"Good morning"' in prompt


def test_unknown_language_passes_through():
    prompt = PromptManager.build_translation_prompt("Good morning", "English", "Klingon")
    assert "from English into Klingon" in prompt


@pytest.mark.parametrize("style", PromptManager.STYLES)
def test_every_style_embeds_text_and_languages(style):
    prompt = PromptManager.build_translation_prompt("Sale starts Monday!", "en", "fr", style=style)
    assert "Sale starts Monday!" in prompt
    assert "English" in prompt
    assert "French" in prompt


def test_business_style_mentions_promotions():
    prompt = PromptManager.build_translation_prompt("Sale starts Monday!", "en", "fr", style="business")
    assert "business" in prompt
    assert "promotion" in prompt


def test_business_ja_style_is_japanese():
    prompt = PromptManager.build_translation_prompt("Sale starts Monday!", "English", "日本語", style="business_ja")
    assert prompt.startswith("あなたはプロの翻訳家です。")
    assert "「English」から「日本語」へ" in prompt


def test_unknown_style_rejected():
    with pytest.raises(ValueError):
        PromptManager.build_translation_prompt("hi", "en", "fr", style="poetic")


def test_build_contents_is_single_turn():
    assert PromptManager.build_contents("prompt") == [{"parts": [{"text": "prompt"}]}]
