# trend_parser.py — text/metadata extraction from Gemini responses
# - TREND n 블록 분할 → title / story / prompt 라벨 매칭
# - grounding chunk → GroundingSource
# - 첫 inline image part → GeneratedImage

import logging
import mimetypes
import re
from typing import List, Optional

from trend_models import GeneratedImage, GroundingSource, Trend

logger = logging.getLogger(__name__)

TREND_SPLIT_RE = re.compile(r"TREND \d:?", re.I)
MIN_BLOCK_CHARS = 50

STORY_FALLBACK = "Explanation of popularity..."
PROMPT_FALLBACK = "Visual description..."

_LIST_MARKER_RE = re.compile(r"^(?:[-•]\s+|\d+[.)]\s+)")


def _clean(value: str) -> str:
    # markdown emphasis / headings / list numbering around a field
    value = value.strip().strip("*_#>").strip()
    value = _LIST_MARKER_RE.sub("", value)
    return value.strip().strip("*_#:").strip()


def _strip_label(line: str, label: str) -> str:
    return _clean(re.sub(rf"{label}:?", "", line, count=1, flags=re.I))


def _find_field(lines: List[str], label: str) -> str:
    for line in lines:
        if label in line.lower():
            return _strip_label(line, label)
    return ""


def split_trend_blocks(text: str, limit: int = 3) -> List[str]:
    parts = TREND_SPLIT_RE.split(text or "")
    if len(parts) > 1:
        parts = parts[1:]  # preamble before the first marker
    return [b for b in parts if len(b.strip()) > MIN_BLOCK_CHARS][:limit]


def parse_trends(text: str, limit: int = 3) -> List[Trend]:
    trends = []
    for index, block in enumerate(split_trend_blocks(text, limit)):
        lines = [l.strip() for l in block.split("\n") if l.strip()]
        title = _strip_label(lines[0], "title") or f"Trend {index + 1}"
        story = _find_field(lines, "story") or STORY_FALLBACK
        visual_prompt = _find_field(lines, "prompt") or PROMPT_FALLBACK
        trends.append(Trend(id=f"trend-{index}", title=title, story=story, visual_prompt=visual_prompt))
    logger.debug("parsed %d trend(s) from %d chars", len(trends), len(text or ""))
    return trends


def _first_candidate(response):
    candidates = getattr(response, "candidates", None) or []
    return candidates[0] if candidates else None


def extract_sources(response) -> List[GroundingSource]:
    cand = _first_candidate(response)
    meta = getattr(cand, "grounding_metadata", None) if cand else None
    chunks = getattr(meta, "grounding_chunks", None) or []
    out = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if not web:
            continue
        out.append(GroundingSource(title=web.title or "Source", uri=web.uri or ""))
    return out


def find_inline_image(response) -> Optional[GeneratedImage]:
    cand = _first_candidate(response)
    content = getattr(cand, "content", None) if cand else None
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is not None and inline.data:
            return GeneratedImage(data=inline.data, mime_type=inline.mime_type or "image/png")
    return None


# ===============================
# Display helpers
# ===============================
def truncate(text: str, limit: int = 20) -> str:
    text = text or ""
    return text[:limit] + "..." if len(text) > limit else text


def download_filename(title: str, mime_type: str = "image/png") -> str:
    slug = re.sub(r"\s+", "-", (title or "").strip()).lower()
    slug = re.sub(r'[\\/:*?"<>|]', "", slug) or "trend"
    ext = mimetypes.guess_extension(mime_type or "") or ".png"
    return f"{slug}{ext}"
