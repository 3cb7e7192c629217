from carousel.models.carousel import Concept
from carousel.services.copywriter import (
    BASE_HASHTAGS,
    CTAS,
    generate_caption,
    generate_copy,
    generate_hashtags,
)


def make_concepts(count):
    return [
        Concept(slide_number=i + 1, title=f"Title {i + 1}", content=f"Point number {i + 1}.")
        for i in range(count)
    ]


def test_caption_lists_first_five_concepts():
    caption = generate_caption(make_concepts(7))

    assert "1. Point number 1." in caption
    assert "5. Point number 5." in caption
    assert "Point number 6." not in caption


def test_hashtags_without_topics_are_base_set():
    assert generate_hashtags("nothing relevant in here") == list(BASE_HASHTAGS)


def test_topic_hashtags_come_first_and_are_deduplicated():
    hashtags = generate_hashtags("A talk about business, tech and productivity.")

    assert hashtags[:2] == ["#business", "#entrepreneur"]
    assert "#technology" in hashtags
    assert "#productivity" in hashtags
    assert len(hashtags) == len(set(hashtags))
    assert len(hashtags) <= 15


def test_hashtags_are_capped():
    text = "business tech marketing finance health productivity leadership"
    assert len(generate_hashtags(text)) == 15


def test_generate_copy_assembles_post():
    concepts = make_concepts(3)
    copy = generate_copy(concepts, "marketing tips")

    assert copy.cta in CTAS
    assert copy.hashtags == " ".join(copy.hashtags_list)
    assert copy.full_post == f"{copy.caption}\n\n{copy.hashtags}"
    assert copy.character_count == len(copy.caption) + len(copy.hashtags) + 2
    assert copy.hashtags_list[0] == "#marketing"
