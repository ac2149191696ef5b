"""All prompt templates for Gemini API calls."""


def build_readiness_prompt() -> str:
    """Frame check before the countdown capture."""
    return """Analyze the image to determine if it's a good photo for extracting book details.
The image should contain a single book cover, be well-lit, in focus, and facing the camera directly.

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{
  "is_ready": <true if the image meets all criteria, otherwise false>
}"""


def build_metadata_prompt() -> str:
    """Title/author extraction from the front cover."""
    return """You are an expert librarian. Extract the title and author of the book from the cover photo.
If you cannot read the information, leave the field blank. Do not make up a title or author.

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{
  "title": "<book title or empty string>",
  "author": "<author name or empty string>"
}"""


def build_condition_prompt(description: str, photo_labels: list[str]) -> str:
    """Structured condition grading across all captured photos.

    The model only grades what it sees. Credits are computed afterwards
    from these scores, so the prompt never asks for a value estimate.
    """
    labels_text = "\n".join(f"- {label}" for label in photo_labels) or "- (unlabeled)"
    description_text = description.strip() or "(no description provided)"

    return f"""You are an expert book appraiser grading the physical condition of a donated book.
Grade ONLY what is visible in the photos. Be consistent: the same book must always get the same grades.

PHOTOS PROVIDED:
{labels_text}

DONOR DESCRIPTION:
---
{description_text}
---

SCORING RUBRIC (integer 0-10 for each feature):
- 9-10: Like new. No visible wear.
- 7-8:  Light wear. Minor scuffs or creases.
- 4-6:  Noticeable wear. Creased spine, worn corners, light stains.
- 1-3:  Heavy wear. Tears, water damage, loose pages.
- 0:    Destroyed.

FEATURES:
- cover_condition: front and back cover surfaces and corners
- spine_condition: creasing, cracking, fading of the spine
- pages_condition: tears, stains, yellowing, dog-ears
- binding_integrity: pages firmly attached, no loose signatures
- cleanliness: dirt, odour indicators, mould, stickers

ANNOTATIONS:
- has_annotations: true if ANY writing, highlighting or underlining is visible
- annotation_severity: "none" if has_annotations is false, "minor" for a few marks,
  "heavy" for extensive writing or highlighting

COMPLETENESS AND REJECTION:
- is_complete: false if any pages appear to be missing or torn out
- should_reject: true only for severe damage (mould, water-logged, broken binding, missing covers)

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "cover_condition": <integer 0-10>,
  "spine_condition": <integer 0-10>,
  "pages_condition": <integer 0-10>,
  "binding_integrity": <integer 0-10>,
  "cleanliness": <integer 0-10>,
  "has_annotations": <true|false>,
  "annotation_severity": "<none|minor|heavy>",
  "is_complete": <true|false>,
  "should_reject": <true|false>,
  "justification": "<2-3 sentences explaining the grades with visible evidence>"
}}"""
