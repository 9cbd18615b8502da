"""Counter key scheme — one logical key maps to two physical counter rows."""

VIEWS_KEY_SUFFIX = "_views"
CLICKS_KEY_SUFFIX = "_clicks"


def views_key(key: str) -> str:
    return key + VIEWS_KEY_SUFFIX


def clicks_key(key: str) -> str:
    return key + CLICKS_KEY_SUFFIX
