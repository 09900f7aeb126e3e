from fastapi import Depends, HTTPException, Request, status

from skillmap.ai.factory import get_answer_mapper, get_skill_classifier
from skillmap.ai.types import AnswerMapper, ClassifierError, SkillClassifier
from skillmap.taxonomy import SkillMatcher, get_default_matcher


def get_matcher(request: Request) -> SkillMatcher:
    matcher = getattr(request.app.state, "matcher", None)
    if matcher is None:
        matcher = get_default_matcher()
        request.app.state.matcher = matcher
    return matcher


def _not_configured(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"AI service is not configured: {exc}",
    )


def get_classifier(request: Request, matcher: SkillMatcher = Depends(get_matcher)) -> SkillClassifier:
    """Classifier prompted with the same taxonomy the matcher cleans its answers against."""
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is not None and getattr(classifier, "taxonomy", None) is matcher.taxonomy:
        return classifier
    try:
        classifier = get_skill_classifier(matcher.taxonomy)
    except (ClassifierError, ValueError) as exc:
        raise _not_configured(exc) from exc
    request.app.state.classifier = classifier
    return classifier


def get_dialogue_mapper(request: Request) -> AnswerMapper:
    mapper = getattr(request.app.state, "dialogue_mapper", None)
    if mapper is not None:
        return mapper
    try:
        mapper = get_answer_mapper()
    except (ClassifierError, ValueError) as exc:
        raise _not_configured(exc) from exc
    request.app.state.dialogue_mapper = mapper
    return mapper


def upstream_error(exc: ClassifierError) -> HTTPException:
    code = status.HTTP_503_SERVICE_UNAVAILABLE if exc.code == "not_configured" else status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail="The AI service failed. Please try again.")
