from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TranslateRequest(BaseModel):
    # Fields are optional here so a missing one becomes our own 400, not a 422
    text: Optional[str] = None
    source_lang: Optional[str] = Field(default=None, alias="sourceLang")  # e.g. "en"
    target_lang: Optional[str] = Field(default=None, alias="targetLang")  # e.g. "ja"

    def is_complete(self) -> bool:
        return bool(self.text and self.source_lang and self.target_lang)


class TranslateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    translated_text: str = Field(alias="translatedText")


class SpeechRequest(BaseModel):
    text: Optional[str] = None
    speaker: Optional[str] = None  # Gemini prebuilt voice name, e.g. "Kore"

    def is_complete(self) -> bool:
        return bool(self.text and self.speaker)


class ErrorResponse(BaseModel):
    error: str
