"""Language names and code helpers.

Only the languages the analysis prompt has been tuned for get a display
name; any other code is shown as-is.
"""

from __future__ import annotations

DISPLAY_NAMES: dict[str, str] = {
    "en": "English",
    "ar": "Arabic",
    "de": "German",
}

# Scripts written right-to-left; the renderer flips text direction for these.
RTL_LANGUAGES: set[str] = {"ar", "fa", "he", "ps", "sd", "ug", "ur", "yi"}


def language_name(code: str) -> str:
    """Get the display name for a code, or the code itself if unknown."""
    return DISPLAY_NAMES.get(code, code)


def primary_subtag(code: str | None) -> str:
    """Normalize a BCP-47-ish tag to its lower-cased primary subtag.

    "ar-SA" -> "ar", "en_US" -> "en", "" -> "".
    """
    if not code:
        return ""
    return code.strip().replace("_", "-").split("-")[0].lower()


def text_direction(code: str) -> str:
    """Return "rtl" or "ltr" for a language code."""
    return "rtl" if primary_subtag(code) in RTL_LANGUAGES else "ltr"
