"""
Narrative enrichment for generated characters.

Asks an LLM for a name, an appearance paragraph and a background paragraph
as a small JSON object, then writes those three narrative fields onto the
character. Rules data (kin, attributes, skills, gear) is never changed.

Reasoning models often wrap their answer in a <think> block and markdown
fences; parse_summary strips both before decoding.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from dragonbane.ai.llm_provider import LLMManager, LLMMessage, LLMRole
from dragonbane.data_models import Character

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3

SYSTEM_PROMPT = "You are a creative fantasy story generator."

PROMPT_TEMPLATE = """\
I'm going to give you the details for a character in the tabletop roleplaying game Dragonbane, and you are going to create the missing details based on this information.
Please create a JSON object with the following keys:
- "name": create a name for this character based off of the kin and background you create,
- "appearance": create a description of this character's appearance based on the information provided,
- "background": create a plausible background for this character based on the information provided

Your output must be valid JSON in the following format:

{{
    "name": "Firstname Lastname",
    "appearance": "A one-paragraph description of the character's appearance.",
    "background": "A one-paragraph description of the character's background."
}}

Only respond with this JSON.

--

Here is the character:
{description}
"""


class NarrativeEnrichmentError(Exception):
    """Raised when no usable summary was produced within the attempt budget."""

    def __init__(self, attempts: int, last_response: str = ""):
        self.attempts = attempts
        self.last_response = last_response
        super().__init__(f"Failed to parse character summary after {attempts} attempts")


@dataclass(frozen=True)
class CharacterSummary:
    """The narrative fields returned by the LLM."""
    name: str
    appearance: str
    background: str

    @classmethod
    def from_dict(cls, data: Any) -> Optional["CharacterSummary"]:
        """Build a summary, or None if a field is missing or not a string."""
        if not isinstance(data, dict):
            return None
        values = [data.get(key) for key in ("name", "appearance", "background")]
        if not all(isinstance(value, str) for value in values):
            return None
        name, appearance, background = (value.strip() for value in values)
        return cls(name=name, appearance=appearance, background=background)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "appearance": self.appearance, "background": self.background}


def build_prompt(character: Character) -> str:
    return PROMPT_TEMPLATE.format(description=character.description())


def parse_summary(raw: str) -> Optional[CharacterSummary]:
    """
    Extract a CharacterSummary from raw model output.

    Drops everything up to a closing </think> tag, removes ```json and ```
    fences, then decodes the text between the first '{' and the last '}'.

    Returns:
        The summary, or None if no valid JSON object with all three fields
        could be found
    """
    text = raw
    think_end = text.find("</think>")
    if think_end != -1:
        text = text[think_end + len("</think>"):]
    text = text.replace("```json", "").replace("```", "")

    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last < first:
        return None

    try:
        data = json.loads(text[first:last + 1])
    except json.JSONDecodeError:
        return None
    return CharacterSummary.from_dict(data)


class NarrativeEnricher:
    """
    Fills in name, appearance and background through an LLM.

    Usage:
        enricher = NarrativeEnricher(LLMManager(LLMConfig.from_env()))
        character = enricher.enrich(character)
    """

    def __init__(self, llm_manager: LLMManager, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.llm_manager = llm_manager
        self.max_attempts = max_attempts

    def request_summary(self, character: Character) -> CharacterSummary:
        """
        Ask the LLM for a summary, retrying on unusable output.

        Raises:
            NarrativeEnrichmentError: If every attempt failed
        """
        messages = [LLMMessage(role=LLMRole.USER, content=build_prompt(character))]
        last_content = ""
        for attempt in range(1, self.max_attempts + 1):
            response = self.llm_manager.complete(messages, system_prompt=SYSTEM_PROMPT)
            last_content = response.content
            if not response.ok:
                logger.warning(f"Narrative attempt {attempt} got no completion: {response.errors}")
                continue

            summary = parse_summary(response.content)
            if summary is not None:
                logger.info(f"Narrative summary parsed on attempt {attempt}: {summary.name}")
                return summary
            logger.warning(f"Narrative attempt {attempt} returned unparseable output")

        raise NarrativeEnrichmentError(self.max_attempts, last_content)

    def enrich(self, character: Character) -> Character:
        """Return a copy of character with the LLM's narrative fields applied."""
        summary = self.request_summary(character)
        return character.with_narrative(
            name=summary.name or character.name,
            appearance=summary.appearance,
            background=summary.background,
        )
