from __future__ import annotations

import asyncio
import copy
import json
from typing import Any

SAMPLE_RESUME_TEXT = (
    "Jane Doe\n"
    "jane@example.com | +1 555 010 2020\n"
    "Senior Backend Engineer with 8 years building Python services.\n"
    "- Reduced API latency by 38% across the payments platform.\n"
)

SAMPLE_ANALYSIS: dict[str, Any] = {
    "personalInfo": {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "+1 555 010 2020",
    },
    "score": {
        "overall": 82,
        "formatting": 75,
        "impact": 88,
        "keywords": 70,
        "relevance": 90,
    },
    "summary": "Strong backend profile with quantified impact.",
    "sections": {
        "experience": [
            {
                "company": "Acme Payments",
                "role": "Senior Backend Engineer",
                "duration": "2019 - Present",
                "description": ["Reduced API latency by 38%."],
            }
        ],
        "education": [{"institution": "State University", "degree": "BSc Computer Science", "year": "2015"}],
        "skills": ["Python", "PostgreSQL", "AWS"],
    },
    "improvements": [
        {"category": "Formatting", "suggestion": "Use consistent date formats.", "priority": "Medium"},
        {"category": "Keywords", "suggestion": "Mention Kubernetes explicitly.", "priority": "High"},
    ],
    "upskilling": ["Kubernetes", "System design"],
}


def analysis_json(**overrides: Any) -> str:
    data = copy.deepcopy(SAMPLE_ANALYSIS)
    data.update(overrides)
    return json.dumps(data)


class FakeAIClient:
    """Scripted provider: each ``analyze`` call pops the next response.

    A response that is an exception instance is raised instead of returned.
    When ``hold`` is set, calls wait until it is released.
    """

    provider = "fake"
    model = "fake-model"

    def __init__(self, *responses: Any):
        self.responses = list(responses) or [analysis_json()]
        self.calls: list[Any] = []
        self.hold: asyncio.Event | None = None
        self.started: asyncio.Event | None = None

    async def analyze(self, payload: Any) -> str:
        self.calls.append(payload)
        if self.started is not None:
            self.started.set()
        if self.hold is not None:
            await self.hold.wait()
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, BaseException):
            raise response
        return response


def build_pdf(pages: list[str]) -> bytes:
    """Minimal single-font PDF with one line of text per page."""
    page_count = len(pages)
    kids = " ".join(f"{4 + 2 * index} 0 R" for index in range(page_count))
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode("latin-1"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for index, text in enumerate(pages):
        escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        stream = f"BT /F1 12 Tf 72 720 Td ({escaped}) Tj ET".encode("latin-1")
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {5 + 2 * index} 0 R >>"
            ).encode("latin-1")
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(out)
