from __future__ import annotations

import argparse
import asyncio
import json
import mimetypes
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_review.core.config import settings  # noqa: E402
from resume_review.core.kv_store import SQLiteKeyValueStore  # noqa: E402
from resume_review.core.lifespan import build_orchestrator  # noqa: E402
from resume_review.services.input_normalizer import FileInput  # noqa: E402


def _read_file(path: Path) -> FileInput:
    content = path.read_bytes()
    mime_type, _ = mimetypes.guess_type(path.name)
    return FileInput(
        content=content,
        mime_type=mime_type or "",
        size_bytes=len(content),
        file_name=path.name,
    )


async def _review(args: argparse.Namespace) -> int:
    store = SQLiteKeyValueStore(args.db or settings.history_db_path)
    try:
        orchestrator = build_orchestrator(store)
        if args.file:
            outcome = await orchestrator.submit_file(_read_file(Path(args.file)))
        else:
            outcome = await orchestrator.submit_text(sys.stdin.read())
    finally:
        store.close()

    for warning in outcome.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    if not outcome.succeeded:
        print(f"error: {outcome.message}", file=sys.stderr)
        return 1

    view = orchestrator.view()
    print(json.dumps(view.model_dump(mode="json", by_alias=True, exclude={"history"}), indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Review a resume and print the structured critique as JSON.")
    parser.add_argument(
        "file",
        nargs="?",
        help="PDF, image (JPG, PNG, WebP) or text file. Reads pasted text from stdin when omitted.",
    )
    parser.add_argument("--db", default=None, help="History database path")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(_review(args)))


if __name__ == "__main__":
    main()
