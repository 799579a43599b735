MENTAL_HEALTH_TAXONOMY_LABELS = {
    "101YP2500X": "Professional Counselor",
    "101YM0800X": "Mental Health Counselor",
    "101YA0400X": "Addiction Counselor",
    "103TC0700X": "Clinical Psychologist",
    "1041C0700X": "Clinical Social Worker",
    "106H00000X": "Marriage & Family Therapist",
}

MENTAL_HEALTH_TAXONOMY_CODES = frozenset(MENTAL_HEALTH_TAXONOMY_LABELS)


def is_mental_health(code: str | None) -> bool:
    return (code or "") in MENTAL_HEALTH_TAXONOMY_CODES
