"""
Instagram post copy (caption, hashtags and call to action) built from concepts.
"""
import random
from typing import Dict, List, Sequence

from carousel.core.constants import CopyConfig
from carousel.models.carousel import Concept, InstagramCopy

BASE_HASHTAGS = (
    "#knowledge",
    "#learning",
    "#education",
    "#tips",
    "#insights",
    "#motivation",
    "#personalgrowth",
    "#selfimprovement",
    "#carousel",
    "#infographic",
)

# Keyword found in the transcript -> hashtags for that topic
TOPIC_HASHTAGS: Dict[str, List[str]] = {
    "business": ["#business", "#entrepreneur", "#success", "#startup"],
    "tech": ["#technology", "#tech", "#innovation", "#digital"],
    "marketing": ["#marketing", "#digitalmarketing", "#socialmedia", "#branding"],
    "finance": ["#finance", "#investing", "#money", "#personalfinance"],
    "health": ["#health", "#wellness", "#fitness", "#healthylifestyle"],
    "productivity": ["#productivity", "#timemanagement", "#efficiency", "#habits"],
    "leadership": ["#leadership", "#management", "#teamwork", "#leader"],
}

CTAS = (
    "💾 Save this post for later reference!",
    "📲 Share it with your network!",
    "💬 Drop your thoughts in the comments!",
    "👆 Double tap if you agree!",
    "🔔 Turn on notifications for more!",
)


def generate_caption(concepts: Sequence[Concept]) -> str:
    main_points = "\n\n".join(
        f"{i + 1}. {c.content}" for i, c in enumerate(concepts[: CopyConfig.CAPTION_POINTS])
    )
    return (
        "✨ Swipe to see the key ideas! ✨\n"
        "\n"
        f"{main_points}\n"
        "\n"
        "💡 Save this post for later!\n"
        "👉 Share it with someone who needs to see this\n"
        "\n"
        "Which point resonated with you the most? Tell us in the comments! 👇\n"
        "\n"
        "---\n"
        "📌 Follow for more valuable content\n"
        "🔄 Share to help others learn"
    )


def generate_hashtags(transcript_text: str) -> List[str]:
    """
    Topic hashtags first (two per topic keyword found), then the base set.

    Duplicates are dropped keeping first occurrence, capped at
    CopyConfig.MAX_HASHTAGS.
    """
    text = transcript_text.lower()
    topic_tags: List[str] = []
    for keyword, tags in TOPIC_HASHTAGS.items():
        if keyword in text:
            topic_tags.extend(tags[: CopyConfig.HASHTAGS_PER_TOPIC])

    unique = list(dict.fromkeys([*topic_tags, *BASE_HASHTAGS]))
    return unique[: CopyConfig.MAX_HASHTAGS]


def generate_cta() -> str:
    return random.choice(CTAS)


def generate_copy(concepts: Sequence[Concept], transcript_text: str) -> InstagramCopy:
    caption = generate_caption(concepts)
    hashtags_list = generate_hashtags(transcript_text)
    hashtags = " ".join(hashtags_list)

    return InstagramCopy(
        caption=caption,
        hashtags=hashtags,
        hashtags_list=hashtags_list,
        cta=generate_cta(),
        full_post=f"{caption}\n\n{hashtags}",
        character_count=len(caption) + len(hashtags) + 2,
    )
