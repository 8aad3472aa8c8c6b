from typing import Dict, List


class PromptManager:
    """
    Stateless builder for the single-turn translation prompt sent to Gemini.
    The wording comes in a few styles, picked once through configuration.
    """

    DEFAULT_STYLE: str = "faithful"

    LANG_MAP = {
        "en": "English",
        "ja": "Japanese",
        "zh": "Chinese",
        "ko": "Korean",
        "es": "Spanish",
        "fr": "French",
        "de": "German",
        "it": "Italian",
        "pt": "Portuguese",
        "ru": "Russian",
        "vi": "Vietnamese",
        "th": "Thai",
    }

    STYLES = ("faithful", "business", "business_ja")

    # --------------------------------------------------
    # Static helpers
    # --------------------------------------------------
    @classmethod
    def check_style(cls, style: str) -> str:
        if style not in cls.STYLES:
            raise ValueError(
                f"Unknown translation prompt style {style!r}; expected one of {', '.join(cls.STYLES)}"
            )
        return style

    @classmethod
    def language_name(cls, lang: str) -> str:
        """'ja' → 'Japanese'; anything unknown is passed through as given."""
        return cls.LANG_MAP.get(lang.strip().lower(), lang)

    # --------------------------------------------------
    # Prompt construction
    # --------------------------------------------------
    @classmethod
    def build_translation_prompt(
        cls,
        text: str,
        source_lang: str,
        target_lang: str,
        style: str = DEFAULT_STYLE,
    ) -> str:
        cls.check_style(style)
        source_name = cls.language_name(source_lang)
        target_name = cls.language_name(target_lang)

        if style == "business_ja":
            return (
                "あなたはプロの翻訳家です。"
                f"以下の文章を「{source_name}」から「{target_name}」へ、"
                "自然で分かりやすく、ビジネス用途に適した文章に翻訳してください。"
                "もし文章が告知や宣伝の場合は、魅力的に聞こえるように工夫してください。"
                f"翻訳する文章： \"{text}\""
            )

        elif style == "business":
            return (
                f"You are a professional translator. Translate the following text from {source_name} "
                f"into {target_name} so that it reads naturally, is easy to understand and suits "
                "business use. If the text is an announcement or a promotion, make it sound appealing. "
                "Reply with the translation only.\n\n"
                f"Text to translate: \"{text}\""
            )

        else:  # default: faithful
            return (
                f"You are a professional translator. Translate the following text from {source_name} "
                f"into {target_name}. Keep the meaning, tone and formatting faithful to the original "
                "and choose wording that fits its context. "
                "Reply with the translation only, without quotes or explanations.\n\n"
                f"Text to translate: \"{text}\""
            )

    @classmethod
    def build_contents(cls, prompt: str) -> List[Dict[str, List[Dict[str, str]]]]:
        """Wrap a prompt as the one-turn `contents` array Gemini expects."""
        return [{"parts": [{"text": prompt}]}]
