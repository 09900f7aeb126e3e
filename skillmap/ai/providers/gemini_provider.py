import os

from skillmap.ai.providers.openai_provider import DialogueMapper, OpenAIClassifier

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiEndpoint:
    """Gemini through its OpenAI-compatible chat completions endpoint."""

    api_key_env = "GEMINI_API_KEY"

    def _default_base_url(self) -> str:
        return os.getenv("GEMINI_BASE_URL") or GEMINI_OPENAI_BASE_URL


class GeminiClassifier(GeminiEndpoint, OpenAIClassifier):
    pass


class GeminiDialogueMapper(GeminiEndpoint, DialogueMapper):
    pass
