"""Built-in digests shown in sample-data preview mode."""

from newsdesk.digests.types import DigestEntry, DigestSource

_SAMPLES = (
    (
        "sample-1",
        "2026-02-23T08:00:00Z",
        "AI News Digest: GPT-5 Rumors, DeepMind Breakthrough & More",
        7,
        DigestSource.SCHEDULED,
    ),
    (
        "sample-2",
        "2026-02-23T07:50:00Z",
        "AI News Digest: Open-Source LLMs Surge, Regulation Updates",
        5,
        DigestSource.SCHEDULED,
    ),
    (
        "sample-3",
        "2026-02-23T07:40:00Z",
        "AI News Digest: Robotics Milestone, New Training Methods",
        6,
        DigestSource.MANUAL,
    ),
    (
        "sample-4",
        "2026-02-22T18:00:00Z",
        "AI News Digest: Multimodal Models, Healthcare AI Wins",
        4,
        DigestSource.SCHEDULED,
    ),
)

SAMPLE_RECIPIENT = "reader@example.com"


def _sample(
    entry_id: str, timestamp: str, subject: str, stories: int, source: DigestSource
) -> DigestEntry:
    return DigestEntry(
        id=entry_id,
        timestamp=timestamp,
        subject=subject,
        recipient=SAMPLE_RECIPIENT,
        stories_count=stories,
        workflow_status="completed",
        email_sent=True,
        source=source,
        raw_response={
            "workflow_status": "completed",
            "research_completed": True,
            "email_sent": True,
            "recipient": SAMPLE_RECIPIENT,
            "subject": subject,
            "stories_count": stories,
            "timestamp": timestamp,
        },
    )


SAMPLE_DIGESTS: tuple[DigestEntry, ...] = tuple(_sample(*s) for s in _SAMPLES)
