"""
Field normalization for logged workouts.

Maps the free-form values a caller sends (activity type, body-part tags,
exercise names) onto the closed vocabularies used by the Notion databases.
"""

import math
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, TypeVar

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

TYPE_RUN = "Run"
TYPE_STRENGTH = "Strength"

# Single tag used for runs, meaning "none"
NO_BODY_PART = "無し"

# Title of the aggregate cardio record created for runs
CARDIO_EXERCISE_LABEL = "有酸素運動"

_STRENGTH_KEYWORDS = ("strength", "gym", "lift", "筋")

# Lowercased token -> canonical body-part category
BODY_PART_MAP: Dict[str, str] = {
    # Japanese categories map to themselves
    "胸": "胸",
    "肩": "肩",
    "腕": "腕",
    "背中": "背中",
    "脚": "脚",
    "足": "脚",
    "腹": "腹",
    "体幹": "腹",
    # English synonyms
    "chest": "胸",
    "pec": "胸",
    "pecs": "胸",
    "shoulder": "肩",
    "shoulders": "肩",
    "delts": "肩",
    "arm": "腕",
    "arms": "腕",
    "biceps": "腕",
    "triceps": "腕",
    "forearm": "腕",
    "forearms": "腕",
    "back": "背中",
    "lats": "背中",
    "legs": "脚",
    "leg": "脚",
    "quads": "脚",
    "hamstrings": "脚",
    "calves": "脚",
    "glutes": "脚",
    "core": "腹",
    "abs": "腹",
    "abdominals": "腹",
}

BODY_PART_DELIMITERS_RE = re.compile(r"[,/／｜|、\s]+")


# ---------------------------------------------------------------------------
# Type
# ---------------------------------------------------------------------------

def normalize_type(raw: Any) -> Any:
    """
    Infer the canonical session type from free text.

    "Running 5k" -> "Run", "Gym Day" -> "Strength". Values that match
    neither keyword set are returned unchanged.
    """
    text = str(raw if raw is not None else "").lower()
    if "run" in text:
        return TYPE_RUN
    if any(keyword in text for keyword in _STRENGTH_KEYWORDS):
        return TYPE_STRENGTH
    return raw


# ---------------------------------------------------------------------------
# Body parts
# ---------------------------------------------------------------------------

def normalize_body_parts(raw: Any) -> List[str]:
    """
    Normalize body-part input into canonical categories.

    Accepts a delimited string ("chest, back / arms") or a list of tokens.
    Unknown tokens are dropped; the result is deduplicated keeping the
    first-seen order.
    """
    if not raw:
        return []

    if isinstance(raw, (list, tuple)):
        tokens: Iterable[Any] = raw
    else:
        tokens = BODY_PART_DELIMITERS_RE.split(str(raw))

    seen: Dict[str, None] = {}
    for token in tokens:
        key = str(token if token is not None else "").lower().strip()
        if not key:
            continue
        category = BODY_PART_MAP.get(key)
        if category:
            seen.setdefault(category, None)
    return list(seen)


def resolve_body_parts(session_type: Any, raw: Any) -> List[str]:
    """Runs are always tagged with NO_BODY_PART; anything else is normalized."""
    if session_type == TYPE_RUN:
        return [NO_BODY_PART]
    return normalize_body_parts(raw)


# ---------------------------------------------------------------------------
# Numbers and labels
# ---------------------------------------------------------------------------

def finite_number(value: Any) -> Optional[float]:
    """Return value if it is a real, finite number (bools excluded), else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        if not math.isfinite(value):
            return None
    except OverflowError:
        # ints beyond float range read as Infinity
        return None
    return value


def clean_text(value: Any) -> Optional[str]:
    """Trimmed string, or None for non-strings and blank strings."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


T = TypeVar("T")


def number_labels(items: Iterable[Tuple[str, T]]) -> Iterator[Tuple[str, T]]:
    """
    Suffix each name with its 1-based occurrence counter.

    [("Bench Press", a), ("Squat", b), ("Bench Press", c)] yields
    ("Bench Press1", a), ("Squat1", b), ("Bench Press2", c).
    """
    counters: Dict[str, int] = {}
    for name, item in items:
        counters[name] = counters.get(name, 0) + 1
        yield f"{name}{counters[name]}", item
