"""
Text Extractor - keyword heuristics over drug label text.

Splits label text into sentences and pulls out the sentences that explain an
interaction, describe its effects, or recommend an action. Best effort only:
when nothing matches, severity-keyed canned text is used instead.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List

from .models import Severity
from .severity_classifier import contains_any

_SENTENCE_BOUNDARY = re.compile(r"[.!?]\s+")

MIN_SENTENCE_CHARS = 10
MIN_SENTENCE_WORDS = 4
MAX_EFFECTS = 4
MAX_RELEVANT_EFFECTS = 3
MAX_RECOMMENDATIONS = 4

RELEVANCE_TERMS = ("interact", "effect", "risk", "may", "can", "should")
EFFECT_TERMS = ("cause", "result", "lead to", "effect", "increas", "risk", "toxicity")
EFFECT_EXCLUDED_TERMS = ("should", "monitor", "avoid")
RECOMMENDATION_TERMS = ("recommend", "should", "must", "advised", "monitor", "avoid")


# ============================================================================
# Severity-keyed fallbacks
# ============================================================================

EXPLANATION_TEMPLATES: Dict[Severity, str] = {
    Severity.MAJOR: "Taking {drug1} together with {drug2} may cause serious health problems.",
    Severity.MODERATE: "Taking {drug1} together with {drug2} may need closer monitoring.",
    Severity.MINOR: "Taking {drug1} together with {drug2} requires attention.",
}

EFFECT_FALLBACKS: Dict[Severity, str] = {
    Severity.MAJOR: "Serious potential health risks - see full description for details",
    Severity.MODERATE: "Moderate health concerns may occur - see full description for details",
    Severity.MINOR: "Minor side effects may occur - see full description for details",
}

DEFAULT_RECOMMENDATIONS: Dict[Severity, List[str]] = {
    Severity.MAJOR: [
        "Contact your doctor immediately before taking your next dose.",
        "Do not stop either medication without medical advice.",
        "If you experience any unusual symptoms, seek medical help right away.",
        "Always inform all healthcare providers about all medications you take.",
    ],
    Severity.MODERATE: [
        "Discuss this combination with your doctor or pharmacist.",
        "Watch for any new or unusual symptoms.",
        "Your doctor may want to monitor your health more closely.",
        "Do not change how you take either medication without medical advice.",
    ],
    Severity.MINOR: [
        "Be aware of any changes in how you feel.",
        "Take medications as prescribed.",
        "Mention this combination at your next doctor visit.",
        "Continue normal monitoring of your health.",
    ],
}


@dataclass
class ExtractedGuidance:
    """Patient-facing text pulled from one interaction description."""
    simplified_explanation: str
    possible_effects: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def _tidy(sentence: str) -> str:
    sentence = sentence.strip()
    sentence = sentence[0].upper() + sentence[1:]
    if not sentence.endswith("."):
        sentence += "."
    return sentence


def split_sentences(text: str) -> List[str]:
    """Split on terminal punctuation followed by whitespace, dropping short fragments."""
    sentences = []
    for fragment in _SENTENCE_BOUNDARY.split(text or ""):
        fragment = fragment.strip()
        if len(fragment) < MIN_SENTENCE_CHARS or len(fragment.split()) < MIN_SENTENCE_WORDS:
            continue
        sentences.append(_tidy(fragment))
    return sentences


def is_relevant(sentence: str, drug1: str, drug2: str) -> bool:
    lowered = sentence.lower()
    names = [name.lower() for name in (drug1, drug2) if name and name.strip()]
    return contains_any(lowered, names) or contains_any(lowered, RELEVANCE_TERMS)


def is_effect(sentence: str) -> bool:
    lowered = sentence.lower()
    return contains_any(lowered, EFFECT_TERMS) and not contains_any(lowered, EFFECT_EXCLUDED_TERMS)


def is_recommendation(sentence: str) -> bool:
    return contains_any(sentence.lower(), RECOMMENDATION_TERMS)


def extract_guidance(text: str, drug1: str, drug2: str, severity: Severity) -> ExtractedGuidance:
    """
    Build the explanation, effects and recommendations for an interaction.

    Args:
        text: Raw label text (joined drug_interactions section)
        drug1: First medication of the pair
        drug2: Second medication of the pair
        severity: Output of classify_severity over the same text

    Returns:
        ExtractedGuidance with every list non-empty
    """
    sentences = split_sentences(text)
    relevant = [s for s in sentences if is_relevant(s, drug1, drug2)]

    if relevant:
        explanation = relevant[0]
    else:
        explanation = EXPLANATION_TEMPLATES[severity].format(drug1=drug1, drug2=drug2)

    effects = [s for s in sentences if is_effect(s)][:MAX_EFFECTS]
    if not effects:
        effects = relevant[:MAX_RELEVANT_EFFECTS]
    if not effects:
        effects = [EFFECT_FALLBACKS[severity]]

    recommendations = [s for s in sentences if is_recommendation(s)][:MAX_RECOMMENDATIONS]
    if not recommendations:
        recommendations = list(DEFAULT_RECOMMENDATIONS[severity])

    return ExtractedGuidance(
        simplified_explanation=explanation,
        possible_effects=effects,
        recommendations=recommendations,
    )
