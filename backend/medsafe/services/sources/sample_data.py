"""
Bundled openFDA responses used when the live API can't be reached.

Analyses that fall back to these results report a partial status.
"""

from copy import deepcopy
from typing import Any, Dict, List

_SAMPLE_EVENTS: List[Dict[str, Any]] = [
    {
        "receivedate": "20220315",
        "patient": {
            "reaction": [
                {"reactionmeddrapt": "Headache", "reactionoutcome": "Recovered/Resolved"},
                {"reactionmeddrapt": "Nausea", "reactionoutcome": "Recovered/Resolved"},
            ],
            "drug": [
                {"medicinalproduct": "Ibuprofen", "drugindication": "Pain relief"},
            ],
        },
        "serious": "No",
    },
    {
        "receivedate": "20220212",
        "patient": {
            "reaction": [
                {"reactionmeddrapt": "Fever", "reactionoutcome": "Recovering/Resolving"},
                {"reactionmeddrapt": "Fatigue", "reactionoutcome": "Recovering/Resolving"},
            ],
            "drug": [
                {"medicinalproduct": "Acetaminophen", "drugindication": "Fever reduction"},
            ],
        },
        "serious": "No",
    },
]

_SAMPLE_LABELS: List[Dict[str, Any]] = [
    {
        "effective_time": "20220101",
        "indications_and_usage": [
            "For the relief of mild to moderate pain",
            "For the treatment of primary dysmenorrhea",
            "For relief of the signs and symptoms of rheumatoid arthritis and osteoarthritis",
        ],
        "warnings": [
            "Cardiovascular Risk: NSAIDs may cause an increased risk of serious cardiovascular thrombotic events.",
            "Gastrointestinal Risk: NSAIDs cause an increased risk of serious gastrointestinal adverse events.",
        ],
        "adverse_reactions": [
            "The most common adverse reactions are headache, nausea, and dizziness.",
            "Serious side effects include heart attack, stroke, and stomach/intestinal bleeding.",
        ],
        "openfda": {
            "brand_name": ["Advil", "Motrin"],
            "generic_name": ["Ibuprofen"],
            "substance_name": ["IBUPROFEN"],
            "manufacturer_name": ["Pfizer Consumer Healthcare"],
            "product_type": ["HUMAN PRESCRIPTION DRUG"],
        },
    },
]


def sample_event_results() -> List[Dict[str, Any]]:
    """Adverse event reports; callers may mutate the copy."""
    return deepcopy(_SAMPLE_EVENTS)


def sample_label_results() -> List[Dict[str, Any]]:
    """Drug labels; callers may mutate the copy."""
    return deepcopy(_SAMPLE_LABELS)
