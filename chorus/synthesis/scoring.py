"""Text heuristics used to rank candidate answers.

Each scorer takes raw answer text and returns a non-negative float. Higher
is better. The scores are deliberately crude keyword counts; they only need
to order candidates, not judge them.
"""

import re

from chorus.reasoning.classifier import count_occurrences

_SENTENCE_SPLIT = re.compile(r"[.!?]+")

ASSUMED_ACCURACY = 0.8

LOGICAL_CONNECTIVES = ("because", "therefore", "thus", "consequently", "since", "as a result")
EMPATHY_WORDS = ("understand", "feel", "empathize", "sorry", "support", "help")

CAUSAL_CONNECTIVES = ("because", "leads to", "results in", "due to", "causes", "as a result")
MECHANISM_WORDS = ("mechanism", "process", "pathway", "factor", "trigger", "bottleneck")

UNCERTAINTY_WORDS = ("likely", "probably", "uncertain", "chance", "might", "possibly")
QUANTIFICATION_WORDS = ("%", "percent", "probability", "odds", "estimate", "ratio")

EVIDENCE_WORDS = ("evidence", "data", "study", "studies", "observed")
METHOD_WORDS = ("method", "experiment", "control", "sample", "measure")
REPRODUCIBILITY_WORDS = ("reproduc", "replicat", "peer review", "verified")

ETHICS_WORDS = ("ethic", "moral", "virtue", "duty", "right and wrong")
METAPHYSICS_WORDS = ("reality", "existence", "being", "mind", "identity")
EPISTEMOLOGY_WORDS = ("knowledge", "belief", "justif", "truth", "certainty")


def vocabulary_hits(text: str, words: tuple[str, ...]) -> int:
    lowered = text.lower()
    return sum(count_occurrences(lowered, word) for word in words)


def _saturating(text: str, words: tuple[str, ...], saturation: int) -> float:
    return min(1.0, vocabulary_hits(text, words) / saturation)


# -- Analytical ----------------------------------------------------------------


def clarity(text: str) -> float:
    """Shorter sentences read clearer; 15 words or fewer scores 1.0."""
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    if not sentences:
        return 0.0
    average = sum(len(s.split()) for s in sentences) / len(sentences)
    return max(0.0, min(1.0, 1 - (average - 15) / 20))


def completeness(text: str) -> float:
    lowered = text.lower()
    score = 0.0
    if "first" in lowered or "initially" in lowered:
        score += 0.3
    if "conclusion" in lowered or "finally" in lowered:
        score += 0.3
    if "example" in lowered or "for instance" in lowered:
        score += 0.4
    return score


def analytical_score(text: str) -> float:
    return clarity(text) + ASSUMED_ACCURACY + completeness(text)


# -- Single-vocabulary scorers -------------------------------------------------


def logical_score(text: str) -> float:
    return _saturating(text, LOGICAL_CONNECTIVES, 3)


def empathy_score(text: str) -> float:
    return _saturating(text, EMPATHY_WORDS, 2)


# -- Multi-vocabulary scorers --------------------------------------------------


def causal_score(text: str) -> float:
    return _saturating(text, CAUSAL_CONNECTIVES, 3) + _saturating(text, MECHANISM_WORDS, 2)


def probabilistic_score(text: str) -> float:
    return _saturating(text, UNCERTAINTY_WORDS, 2) + _saturating(text, QUANTIFICATION_WORDS, 2)


def scientific_score(text: str) -> float:
    return (
        _saturating(text, EVIDENCE_WORDS, 2)
        + _saturating(text, METHOD_WORDS, 2)
        + _saturating(text, REPRODUCIBILITY_WORDS, 1)
    )


def philosophical_score(text: str) -> float:
    return (
        _saturating(text, ETHICS_WORDS, 2)
        + _saturating(text, METAPHYSICS_WORDS, 2)
        + _saturating(text, EPISTEMOLOGY_WORDS, 2)
    )
