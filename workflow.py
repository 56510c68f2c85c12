# workflow.py — session state transitions for one upload
# state는 MutableMapping (앱에서는 st.session_state)
# 흐름: IDLE → (ANALYZING_PRODUCT) → RESEARCHING → VISUALIZING → COMPLETED
#       실패 시 page-level error + IDLE

import json
import logging
from typing import Callable, Iterable, List, MutableMapping, Optional, Tuple

from google import genai

import gemini_service
from mediums import get_medium
from settings import Settings
from trend_models import AppState, Trend
from trend_parser import truncate

logger = logging.getLogger(__name__)

RESEARCH_FAILED = "Market analysis failed. Please check your connection and try again."
VISUAL_FAILED = "Visual fail"

SESSION_DEFAULTS = {
    "app_state": AppState.IDLE,
    "product": None,
    "trends": list,
    "sources": list,
    "product_category": "",
    "error": None,
    "mockups": dict,
}

TrendCallback = Callable[[int, Trend], None]


def _default(value):
    return value() if callable(value) else value


def init_session(state: MutableMapping) -> None:
    for key, value in SESSION_DEFAULTS.items():
        if key not in state:
            state[key] = _default(value)


def reset_session(state: MutableMapping, product=None) -> None:
    for key, value in SESSION_DEFAULTS.items():
        state[key] = _default(value)
    state["product"] = product


def run_research(state: MutableMapping, client: genai.Client, settings: Settings, tailor: bool = False) -> bool:
    """Research trends for the current product. Returns False (with state["error"] set) on failure."""
    product = state.get("product")
    if product is None:
        return False
    state["error"] = None

    # category only feeds the tailored prompt
    category = ""
    if tailor:
        state["app_state"] = AppState.ANALYZING_PRODUCT
        try:
            category = gemini_service.analyze_product(client, product, settings.analysis_model)
        except Exception as e:
            logger.warning("product analysis failed, continuing without category: %s", e)
    state["product_category"] = category

    state["app_state"] = AppState.RESEARCHING
    try:
        result = gemini_service.research_current_trends(
            client, settings.research_model, product_category=category, tailor=tailor
        )
        if not result.trends:
            raise gemini_service.NoTrendsError()
    except Exception as e:
        logger.exception("trend research failed")
        state["error"] = str(e) or RESEARCH_FAILED
        state["app_state"] = AppState.IDLE
        return False

    state["trends"] = result.trends
    state["sources"] = result.sources
    state["app_state"] = AppState.VISUALIZING
    return True


def visualize_trends(
    state: MutableMapping,
    client: genai.Client,
    settings: Settings,
    on_update: Optional[TrendCallback] = None,
) -> None:
    product = state["product"]
    trends = state["trends"]
    state["app_state"] = AppState.VISUALIZING
    for t in trends:
        t.mark_loading()

    # one at a time, UI refreshed after each
    try:
        for i, t in enumerate(trends):
            try:
                img = gemini_service.generate_trend_visualization(client, product, t.visual_prompt, settings.image_model)
                t.mark_rendered(img)
            except Exception:
                logger.exception("visualization failed for %s (%s)", t.id, t.title)
                t.mark_failed(VISUAL_FAILED)
            if on_update:
                on_update(i, t)
    finally:
        # a rerun can interrupt the loop mid-way; never leave cards loading
        for t in trends:
            if t.loading:
                t.mark_failed(VISUAL_FAILED)
        state["app_state"] = AppState.COMPLETED


def generate_mockups(
    state: MutableMapping,
    client: genai.Client,
    settings: Settings,
    medium_ids: Iterable[str],
    on_update: Optional[Callable[[str, object], None]] = None,
) -> dict:
    product = state["product"]
    mockups = state.setdefault("mockups", {})
    for medium_id in medium_ids:
        medium = get_medium(medium_id)
        try:
            mockups[medium_id] = gemini_service.generate_medium_mockup(client, product, medium, settings.image_model)
        except Exception as e:
            logger.exception("mockup failed for %s", medium_id)
            mockups[medium_id] = f"Mockup failed: {e}"
        if on_update:
            on_update(medium_id, mockups[medium_id])
    return mockups


# ===============================
# UI state helpers
# ===============================
def upload_key(up) -> str:
    return getattr(up, "file_id", None) or f"{up.name}:{up.size}"


def sync_upload(state: MutableMapping, up, to_product: Callable) -> bool:
    """Reset the session when the uploaded file changes. Returns True on reset."""
    if up is not None:
        key = upload_key(up)
        if state.get("upload_id") == key:
            return False
        logger.info("new upload %s (%s, %d bytes)", up.name, up.type, up.size)
        reset_session(state, to_product(up))
        state["upload_id"] = key
        return True
    if state.get("product") is not None:
        reset_session(state)
        state["upload_id"] = None
        return True
    return False


def can_start(state: MutableMapping) -> bool:
    return state.get("product") is not None and state.get("app_state") == AppState.IDLE


def visible_sources(sources, limit: int = 3, title_chars: int = 20) -> List[Tuple[str, str]]:
    return [(truncate(s.title, title_chars), s.uri) for s in (sources or [])[:limit]]


def result_json(state: MutableMapping) -> bytes:
    payload = {
        "product_category": state.get("product_category") or "",
        "trends": [t.to_dict() for t in state.get("trends") or []],
        "sources": [{"title": s.title, "uri": s.uri} for s in state.get("sources") or []],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
