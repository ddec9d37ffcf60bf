"""
Topic pack assembly.

A topic pack condenses the processed chunks of one topic into reusable
writing context: a terminology map, prioritized regulation rules and
sample sections grouped by heading.
"""

from typing import Iterable, Sequence

from chunking.sections import group_by_section

from .models import PriorityRule, ProcessedChunk, SampleSection, SimpleEntity, TopicPack

MAX_PRIORITY_RULES = 10
MAX_SAMPLE_SECTIONS = 10
CHUNKS_PER_SAMPLE = 3


def build_topic_pack(
    topic_name: str,
    chunks: Sequence[ProcessedChunk],
    entities: Iterable[SimpleEntity],
) -> TopicPack:
    entities = list(entities)

    terminology_map = {
        e.value: e.metadata["definition"]
        for e in entities
        if e.type == "term" and e.metadata.get("definition")
    }

    regulations = [e for e in entities if e.type == "regulation"]
    priority_rules = [
        PriorityRule(rule=f"{e.value}: {e.context}", priority=100 - i * 10)
        for i, e in enumerate(regulations[:MAX_PRIORITY_RULES])
    ]

    chunk_ids = {id(item.chunk): item.chunk_id for item in chunks}
    sample_sections = []
    for group in group_by_section(item.chunk for item in chunks)[:MAX_SAMPLE_SECTIONS]:
        samples = group.chunks[:CHUNKS_PER_SAMPLE]
        sample_sections.append(SampleSection(
            heading=group.label.display_name,
            kind=group.label.kind.value,
            content="\n\n".join(c.content for c in samples),
            source_chunk_ids=[chunk_ids[id(c)] for c in samples],
        ))

    return TopicPack(
        name=f"{topic_name} Knowledge Pack",
        terminology_map=terminology_map,
        priority_rules=priority_rules,
        sample_sections=sample_sections,
    )
