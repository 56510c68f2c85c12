# app.py — BrandVision (trend research → staged product visuals)
# - Google Search grounding으로 최근 30일 비주얼 트렌드 3개 리서치
# - 업로드한 제품 사진을 트렌드별 스타일로 순차 재연출
# - 매체 목업(머그/티셔츠/빌보드 …) 선택 생성
# 실행: streamlit run app.py
# 필요: pip install -e .

import logging

import streamlit as st
from google import genai

from mediums import MARKETING_MEDIUMS, get_medium
from settings import Settings, load_api_key, log_level
from trend_models import AppState, GeneratedImage, ProductImage, Trend
from trend_parser import download_filename
from workflow import (
    can_start,
    generate_mockups,
    init_session,
    reset_session,
    result_json,
    run_research,
    sync_upload,
    visible_sources,
    visualize_trends,
)

logging.basicConfig(level=log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("brandvision")

# ===============================
# 0) API KEY (secrets → ENV → .env)
# ===============================
st.set_page_config(page_title="BrandVision Pro", page_icon="⚡", layout="wide")

API_KEY = load_api_key(st.secrets)
if not API_KEY:
    st.error("❌ GEMINI_API_KEY is missing. Set it in .env, the environment, or Streamlit secrets.")
    st.stop()

SETTINGS = Settings.from_env(API_KEY)

# ===============================
# 1) Gemini client
# ===============================
@st.cache_resource(show_spinner=False)
def get_client(api_key: str):
    return genai.Client(api_key=api_key)

client = get_client(API_KEY)

# ===============================
# 2) Styles
# ===============================
CARD_CSS = """
<style>
:root{--card-bg:#0f172a;--subcard-bg:#1e293b;--accent:#6366f1;--danger:#f87171;}
.hero-badge{display:inline-block;padding:4px 12px;border-radius:999px;font-size:12px;font-weight:800;
  letter-spacing:.12em;text-transform:uppercase;color:#818cf8;background:rgba(99,102,241,.1);border:1px solid rgba(99,102,241,.2)}
.hero-sub{color:#94a3b8;font-size:16px;margin:6px 0 18px 0}
.section-sep{border:0;border-top:1px solid #e5e7eb;margin:18px 0}
.trend-label{color:#818cf8;font-size:12px;font-weight:900;text-transform:uppercase;letter-spacing:.12em}
.trend-title{font-size:28px;font-weight:900;line-height:1.15;margin:4px 0 12px 0}
.story-head{color:#94a3b8;font-size:13px;font-weight:700;text-transform:uppercase;letter-spacing:.08em}
.story{font-style:italic;font-size:16px;line-height:1.6;margin:6px 0 14px 0}
.src-head{color:#64748b;font-size:11px;font-weight:700;text-transform:uppercase;letter-spacing:.08em;margin-top:10px}
.src{display:inline-block;padding:4px 10px;margin:4px 4px 0 0;border-radius:8px;font-size:11px;
  border:1px solid #e5e7eb;text-decoration:none}
.rendering{color:#818cf8;font-size:12px;font-weight:800;text-transform:uppercase;letter-spacing:.1em}
.applying{color:#64748b;font-size:11px;font-style:italic}
.inline-error{color:var(--danger);font-size:14px}
.tag{display:inline-block;background:#e5e7eb;border-radius:999px;padding:4px 10px;font-size:12px;font-weight:700;color:#374151}
.footer{color:#64748b;font-size:11px;font-weight:700;text-transform:uppercase;letter-spacing:.2em;text-align:center;margin-top:40px}
</style>
"""

# ===============================
# 3) Utils
# ===============================
def esc(s: str) -> str:
    s = str(s or ""); return s.replace("&","&amp;").replace("<","&lt;").replace(">","&gt;")

def attr_esc(s: str) -> str:
    return esc(s).replace('"', "&quot;").replace("'", "&#39;")

def to_product_image(up) -> ProductImage:
    return ProductImage(data=up.getvalue(), mime_type=up.type or "image/png", name=up.name)

def render_sources(sources) -> None:
    if not sources: return
    links = "".join(
        f"<a class='src' href='{attr_esc(uri)}' target='_blank' rel='noopener noreferrer'>🔗 {esc(title)}</a>"
        for title, uri in visible_sources(sources)
    )
    st.markdown(f"<div class='src-head'>Verification Sources</div><div>{links}</div>", unsafe_allow_html=True)

def render_visual(slot, trend: Trend, with_download: bool = True) -> None:
    with slot.container():
        if trend.loading and trend.image is None:
            st.markdown("<div class='rendering'>Rendering trend aesthetic...</div>", unsafe_allow_html=True)
            st.markdown(f"<div class='applying'>Applying: {esc(trend.visual_prompt[:100])}...</div>", unsafe_allow_html=True)
        elif trend.error:
            st.markdown(f"<div class='inline-error'>{esc(trend.error)}</div>", unsafe_allow_html=True)
        elif trend.image is not None:
            st.image(trend.image.data, caption=trend.title)
            if with_download:
                st.download_button(
                    "Export asset",
                    data=trend.image.data,
                    file_name=download_filename(trend.title, trend.image.mime_type),
                    mime=trend.image.mime_type,
                    key=f"dl-{trend.id}",
                )

def render_trend_card(idx: int, trend: Trend, sources) -> object:
    st.markdown("<hr class='section-sep'/>", unsafe_allow_html=True)
    left, right = st.columns(2)
    with left:
        st.markdown(f"<div class='trend-label'>Trend Analysis 0{idx + 1}</div>", unsafe_allow_html=True)
        st.markdown(f"<div class='trend-title'>{esc(trend.title)}</div>", unsafe_allow_html=True)
        st.markdown("<div class='story-head'>The Story</div>", unsafe_allow_html=True)
        st.markdown(f"<div class='story'>“{esc(trend.story)}”</div>", unsafe_allow_html=True)
        render_sources(sources)
    with right:
        slot = st.empty()
    return slot

# ===============================
# 4) UI
# ===============================
ss = st.session_state
init_session(ss)

st.markdown(CARD_CSS, unsafe_allow_html=True)
st.title("⚡ BrandVision Pro")
st.markdown("<span class='hero-badge'>Real-time market context enabled</span>", unsafe_allow_html=True)
st.markdown(
    "<div class='hero-sub'>Research what's winning in the last 30 days and see your product staged in those trending aesthetics.</div>",
    unsafe_allow_html=True,
)

with st.expander("Help", expanded=False):
    st.markdown(
        "1. Upload a product photo.\n\n"
        "2. **Discover & Visualize** asks Gemini (with Google Search) for three current visual marketing trends.\n\n"
        "3. Each trend is applied to your product one at a time. The product itself stays untouched; only the staging changes.\n\n"
        "4. When finished, you can also place the product on marketing mediums (mug, t-shirt, billboard …)."
    )

with st.sidebar:
    st.subheader("Options")
    tailor = st.checkbox(
        "Tailor research to detected product category",
        value=False,
        help="Adds the product category detected from your photo to the research prompt.",
    )
    st.caption(f"Research model: `{SETTINGS.research_model}`")
    st.caption(f"Image model: `{SETTINGS.image_model}`")

up = st.file_uploader("1. Upload product", type=["png", "jpg", "jpeg", "webp"])
sync_upload(ss, up, to_product_image)

product = ss.get("product")
if product is None:
    st.info("Visualization results will appear after research.")
    st.stop()

cols = st.columns([1, 2])
with cols[0]:
    st.image(product.data, caption=product.name)
    if ss.get("product_category"):
        st.markdown(f"<span class='tag'>Category: {esc(ss['product_category'])}</span>", unsafe_allow_html=True)
with cols[1]:
    go = st.button("Discover & Visualize →", type="primary", disabled=not can_start(ss))
    if ss["app_state"] != AppState.IDLE:
        if st.button("Start over"):
            reset_session(ss, product)
            st.rerun()

# ===============================
# 5) Run
# ===============================
if go:
    logger.info("research started for %s (tailor=%s)", product.name, tailor)
    with st.spinner("Scanning global trends..."):
        ok = run_research(ss, client, SETTINGS, tailor=tailor)
    if ok:
        slots = [render_trend_card(i, t, ss["sources"]) for i, t in enumerate(ss["trends"])]
        for t, slot in zip(ss["trends"], slots):
            t.mark_loading()
            render_visual(slot, t, with_download=False)
        with st.spinner("Applying aesthetics..."):
            visualize_trends(ss, client, SETTINGS, on_update=lambda i, t: render_visual(slots[i], t, with_download=False))
        st.rerun()

if ss.get("error"):
    st.error(ss["error"])

for i, t in enumerate(ss["trends"]):
    render_visual(render_trend_card(i, t, ss["sources"]), t)

# ===============================
# 6) Mockups (after completion)
# ===============================
if ss["app_state"] == AppState.COMPLETED:
    st.markdown("<hr class='section-sep'/>", unsafe_allow_html=True)
    st.subheader("2. Marketing mockups")
    picked = st.multiselect(
        "Mediums",
        options=[m.id for m in MARKETING_MEDIUMS],
        format_func=lambda mid: f"{get_medium(mid).icon} {get_medium(mid).name}",
    )
    if st.button("Generate mockups", disabled=not picked):
        with st.spinner("Placing your product on the selected mediums..."):
            generate_mockups(ss, client, SETTINGS, picked)

    mockups = ss.get("mockups") or {}
    if mockups:
        grid = st.columns(3)
        for n, (mid, item) in enumerate(mockups.items()):
            medium = get_medium(mid)
            with grid[n % 3]:
                st.markdown(f"**{medium.icon} {esc(medium.name)}**")
                if isinstance(item, GeneratedImage):
                    st.image(item.data)
                    st.download_button(
                        "Download",
                        data=item.data,
                        file_name=download_filename(medium.name, item.mime_type),
                        mime=item.mime_type,
                        key=f"mock-{mid}",
                    )
                else:
                    st.markdown(f"<div class='inline-error'>{esc(item)}</div>", unsafe_allow_html=True)

    # 결과 다운로드
    st.download_button(
        "Download results (JSON)",
        data=result_json(ss),
        file_name="brandvision_trends.json",
        mime="application/json",
    )
    st.success("✅ Analysis complete")

st.markdown("<div class='footer'>BrandVision Pro · Google Search grounding & Gemini</div>", unsafe_allow_html=True)
