"""Prompt builders for lead parsing and program title descriptions."""

_LEAD_PARSING_INSTRUCTIONS = """\
You extract marketing leads from unstructured text.

STRICT RULES:
- Use ONLY information present in the text. Do not invent contact details.
- Leave a field empty when the text does not state it.
- Return strictly valid JSON matching the response schema.
- Do NOT wrap the JSON in markdown code fences.
"""

_TITLE_DESCRIPTION_INSTRUCTIONS = """\
You write descriptions for marketing programs.

Write one or two plain sentences (at most 60 words) describing what a
marketing program with the title below is likely about and who it targets.
Return only the description text, without quotes, labels or markdown.
"""


class LeadParsingPromptBuilder:
    """Builds the prompt that turns free text into structured lead records.

    The response shape itself is enforced by the caller-supplied JSON schema
    sent as the structured-output schema, so the prompt only carries the
    extraction rules and the text.
    """

    def build_prompt(self, text: str) -> str:
        return f"{_LEAD_PARSING_INSTRUCTIONS}\n## Text\n{text.strip()}\n"


class TitleDescriptionPromptBuilder:
    def build_prompt(self, title: str) -> str:
        return f"{_TITLE_DESCRIPTION_INSTRUCTIONS}\nTitle: {title.strip()}\n"
