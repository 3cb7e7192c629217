"""
Centralized configuration for LLM Prompts.

Prompts are grouped by domain (Service) for better discoverability and context.
"""

class ConceptPrompts:
    """Prompts for key-concept extraction."""

    SYSTEM = """You are an expert at creating Instagram carousel content.
Analyze the transcript of a YouTube video and extract its most important and valuable concepts.

For each concept produce:
1. A punchy, attention-grabbing TITLE (at most 6 words, no emojis)
2. A rich CONTENT paragraph (150-250 characters) containing:
   - The key point or specific tip
   - Data, statistics or examples when the video gives them
   - Concrete benefits or expected results

CRITICAL RULES:
- Content must be SPECIFIC and ACTIONABLE, never generic
- Include numbers, percentages or data when the video mentions them
- If the video gives tips or steps, describe each one clearly
- Avoid vague phrases such as "it is important" or "you should consider"
- Write in the SAME language as the transcript
- Do not repeat information across slides

Respond ONLY with valid JSON (no markdown, no backticks):
{"concepts":[{"title":"...", "content":"..."}]}"""

    USER = """Extract exactly {slide_count} concepts from this transcript.

Transcript:
{transcript}"""


class SlidePrompts:
    """Prompts for slide text and image-generation templates."""

    COVER_TITLE = """Write an attractive cover title for an Instagram carousel based on this video title:
"{video_title}"

Requirements:
- At most 8 words
- Attractive and curiosity-provoking
- In the SAME language as the original
- No emojis or special characters
- No quotes

Respond ONLY with the title, nothing else."""

    COVER_IMAGE = """A professional social media carousel cover image, portrait format (3:4 aspect ratio).

Visual elements:
- Modern dark gradient background with deep navy blue and subtle purple tones
- Abstract geometric shapes and soft glowing accents in coral and cyan colors
- Professional, minimal design with plenty of negative space
- Elegant typography-style composition

The image should evoke the theme: "{topic}"

Include the text "{title}" as the main title, displayed in large, bold, modern white sans-serif font, centered.
Below the title, include smaller text "Swipe to explore →" in a muted gray color.

Style: Premium editorial design, modern and sleek, similar to high-end marketing materials."""

    CONTENT_IMAGE = """A professional social media carousel content slide, portrait format (3:4 aspect ratio).

Visual design:
- Dark gradient background transitioning from deep navy (#1a1a2e) to darker blue (#0f3460)
- Clean, minimal layout with ample white space
- Subtle geometric accent elements in coral color (#e94560)

Text content to display:
- Large number "{number}" in coral color (#e94560), bold font, positioned in upper left area
- Title: "{title}" in white, bold, medium-large size font below the number
- Body text: "{content}" in light gray color, smaller readable font, centered

Include a thin progress bar at the bottom showing {progress}% progress in coral-to-orange gradient.
Include "{slide_number}/{total}" as small text in the bottom right corner.

Style: Consistent with a premium Instagram carousel series. Editorial quality, clean typography."""
