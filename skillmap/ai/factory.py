from skillmap.ai.config import AIConfig, load_ai_config
from skillmap.ai.types import AnswerMapper, SkillClassifier
from skillmap.taxonomy import Taxonomy

from skillmap.ai.providers.openai_provider import DialogueMapper, OpenAIClassifier
from skillmap.ai.providers.gemini_provider import GeminiClassifier, GeminiDialogueMapper


def _unsupported(cfg: AIConfig) -> ValueError:
    return ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


def get_skill_classifier(taxonomy: Taxonomy) -> SkillClassifier:
    cfg = load_ai_config()
    options = {"timeout_s": cfg.timeout_s, "max_retries": cfg.max_retries}

    if cfg.provider == "openai":
        return OpenAIClassifier(cfg.model, taxonomy, **options)

    if cfg.provider == "gemini":
        return GeminiClassifier(cfg.model, taxonomy, **options)

    raise _unsupported(cfg)


def get_answer_mapper() -> AnswerMapper:
    cfg = load_ai_config()
    options = {"timeout_s": cfg.timeout_s, "max_retries": cfg.max_retries}

    if cfg.provider == "openai":
        return DialogueMapper(cfg.model, **options)

    if cfg.provider == "gemini":
        return GeminiDialogueMapper(cfg.model, **options)

    raise _unsupported(cfg)
