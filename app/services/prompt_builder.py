"""Helpers to construct system/user prompts for the lyric generator.

Given lesson content plus a complexity and musical-style tier, we emit:
* A system prompt describing the Sierra Leonean songwriter persona.
* A user prompt with age-appropriate guidance, style guidance, the lesson
  itself, and the strict JSON response contract.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.models import Complexity, MusicalStyle

COMPLEXITY_GUIDE = {
    Complexity.SIMPLE: (
        "very simple vocabulary suitable for children ages 5-7, short sentences, "
        "lots of repetition"
    ),
    Complexity.MODERATE: (
        "moderate vocabulary for children ages 8-10, slightly longer verses, "
        "some new words"
    ),
    Complexity.ADVANCED: (
        "more complex vocabulary for children ages 11-12, richer language while "
        "still accessible"
    ),
}

STYLE_GUIDE = {
    MusicalStyle.TRADITIONAL: (
        "traditional West African folk song style with call-and-response patterns, "
        "djembe rhythms, and community singing elements common in Sierra Leone and "
        "West Africa"
    ),
    MusicalStyle.HIGHLIFE: (
        "Highlife music style popular in Ghana and Sierra Leone, with upbeat rhythms, "
        "brass-influenced melodies, and danceable patterns"
    ),
    MusicalStyle.AFROBEAT: (
        "Afrobeat style with strong rhythmic patterns, repetitive grooves, and "
        "energetic call-and-response suitable for learning"
    ),
    MusicalStyle.PALM_WINE: (
        "Palm-wine music style with acoustic guitar-like rhythms, storytelling "
        "tradition, and relaxed melodic patterns from coastal West Africa"
    ),
}

SYSTEM_PROMPT = (
    "You are an expert educational songwriter from Sierra Leone, West Africa. "
    "You create songs in Sierra Leonean English and Krio (when appropriate), with "
    "authentic local expressions and cultural references that Sierra Leonean "
    "primary school children will understand and connect with."
)

RESPONSE_CONTRACT = """Respond with JSON in this exact format:
{
  "title": "A catchy, memorable title for the song",
  "topic": "The main educational topic (e.g., 'Water Cycle', 'Addition', 'Hygiene')",
  "lyrics": "Full song lyrics with [Verse 1], [Chorus], [Verse 2], etc. markers",
  "rhythmPattern": "Description of how to clap or tap along (e.g., 'Clap on beats 1 and 3, stomp on beat 4')",
  "culturalNotes": "Brief explanation of the West African musical elements and cultural references used in the song"
}"""


@dataclass(frozen=True)
class PromptBundle:
    system_prompt: str
    user_prompt: str


def build_prompt(
    *,
    content: str,
    style: MusicalStyle,
    complexity: Complexity,
) -> PromptBundle:
    """Render the prompts for one lyric-generation request."""

    user_prompt = "\n".join(
        [
            "You are an expert educational songwriter specializing in creating songs "
            "for primary school children in Sierra Leone and West Africa. Your songs "
            "help children learn and retain educational content through culturally "
            "appropriate music.",
            "",
            "Create an educational song based on the following lesson content. The song should:",
            f"1. Use {COMPLEXITY_GUIDE[complexity]}",
            f"2. Be in {STYLE_GUIDE[style]}",
            "3. Include West African cultural elements (local references, proverbs, or "
            "idioms when appropriate)",
            "4. Be memorable and easy to sing with clear rhythm",
            "5. Have a clear verse-chorus structure",
            "6. Include educational content from the lesson material",
            '7. Use Sierra Leonean English expressions and Krio words naturally where '
            'appropriate (e.g., "wetin" for "what", "sef" for emphasis, "pikin" for '
            '"child"). Write in a way that sounds natural when sung with a Sierra '
            "Leonean accent",
            "",
            "Lesson Content:",
            content,
            "",
            RESPONSE_CONTRACT,
        ]
    )

    return PromptBundle(system_prompt=SYSTEM_PROMPT, user_prompt=user_prompt)


__all__ = ["PromptBundle", "build_prompt", "COMPLEXITY_GUIDE", "STYLE_GUIDE"]
