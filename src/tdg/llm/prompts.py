"""Prompt template for video transcript analysis."""

from __future__ import annotations

from tdg.core.languages import language_name

# Section headings the parser looks for. Keep in sync with tdg.llm.parser.
ABSTRACT_HEADING = "Abstract"
KEY_CONCEPTS_HEADING = "Key Concepts"
CATEGORY_HEADING = "Category"
SUMMARY_HEADING = "Detailed Summary"

ANALYSIS_PROMPT = """\
Analyze the following video transcript and respond in {language}. \
Write every section in {language}, even if the transcript uses another language.

Structure your answer in exactly these four sections, using the headings as written:

**{abstract}:**
A short paragraph (2-3 sentences) stating what the video is about.

**{key_concepts}:**
- One bullet per important idea, fact or argument
- Start every bullet with "-"
- 3 to 7 bullets

**{category}:**
A single category for the video (e.g. Education, Technology, News, Entertainment).

**{summary}:**
A detailed summary covering the main topic, the key arguments or information, \
and the important conclusions, in several paragraphs.

Do not add any other sections, preamble or closing remarks.

Transcript:
{transcript}
"""


def build_prompt(transcript: str, language_code: str) -> str:
    """Build the analysis request for a transcript.

    Args:
        transcript: Flattened transcript text.
        language_code: Detected language (e.g. "ar"). Unknown codes are
            used verbatim as the language name.

    Returns:
        The full prompt, with the transcript last.
    """
    return ANALYSIS_PROMPT.format(
        language=language_name(language_code),
        abstract=ABSTRACT_HEADING,
        key_concepts=KEY_CONCEPTS_HEADING,
        category=CATEGORY_HEADING,
        summary=SUMMARY_HEADING,
        transcript=transcript,
    )


def build_messages(transcript: str, language_code: str) -> list[dict[str, str]]:
    """Wrap the analysis prompt as chat messages in OpenAI format."""
    return [{"role": "user", "content": build_prompt(transcript, language_code)}]
