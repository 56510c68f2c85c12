# gemini_service.py — research (Search grounding) + image calls
# - research_current_trends: 고정 프롬프트 + google_search tool → ResearchResult
# - generate_trend_visualization: 업로드 이미지 + 스타일 지시 → 첫 inline image
# - analyze_product / generate_medium_mockup: 카테고리 판별, 매체 목업

import logging

from google import genai
from google.genai import types

from trend_models import GeneratedImage, MarketingMedium, ProductImage, ResearchResult
from trend_parser import extract_sources, find_inline_image, parse_trends

logger = logging.getLogger(__name__)


class BrandVisionError(Exception):
    pass


class ResearchError(BrandVisionError):
    pass


class NoTrendsError(ResearchError):
    def __init__(self, message: str = "Could not identify specific trends at this moment."):
        super().__init__(message)


class VisualizationError(BrandVisionError):
    pass


# ===============================
# Prompts
# ===============================
RESEARCH_PROMPT = """Identify exactly 3 distinct visual marketing trends or aesthetics that have become popular in the global creative industry within the last 30 days (e.g., specific color palettes, photography styles, or graphic design movements).
For each trend, provide:
1. A short catchy TITLE.
2. A "STORY": Why it is popular right now and its cultural impact (2-3 sentences).
3. A "PROMPT": A highly descriptive visual prompt that describes how a product would be staged in this style.

Format the response clearly with labels TREND 1, TREND 2, TREND 3."""

CATEGORY_FOCUS = "\n\nFocus on trends that suit staging a product in this category: {category}."

VISUALIZATION_PROMPT = """Apply this trending aesthetic to the product in the image: {visual_prompt}.
CRITICAL: The product itself (labels, logo, colors) must remain 100% consistent and untouched. Change only the environment, lighting, and staging style to match the trend."""

PRODUCT_CATEGORY_PROMPT = (
    "Identify the product shown in this image. "
    "Reply with a short product category of 2-5 words (e.g. 'craft beer can', 'skincare serum'), nothing else."
)


def build_research_prompt(product_category: str = "", tailor: bool = False) -> str:
    if tailor and product_category.strip():
        return RESEARCH_PROMPT + CATEGORY_FOCUS.format(category=product_category.strip())
    return RESEARCH_PROMPT


def _image_part(image: ProductImage) -> types.Part:
    return types.Part.from_bytes(data=image.data, mime_type=image.mime_type)


# ===============================
# Calls
# ===============================
def research_current_trends(
    client: genai.Client,
    model: str,
    product_category: str = "",
    tailor: bool = False,
) -> ResearchResult:
    prompt = build_research_prompt(product_category, tailor)
    resp = client.models.generate_content(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        ),
    )
    text = getattr(resp, "text", "") or ""
    trends = parse_trends(text)
    sources = extract_sources(resp)
    logger.info("research (%s): %d trend(s), %d source(s)", model, len(trends), len(sources))
    return ResearchResult(trends=trends, sources=sources, product_category=product_category)


def _generate_image(client: genai.Client, image: ProductImage, prompt: str, model: str) -> GeneratedImage:
    resp = client.models.generate_content(
        model=model,
        contents=[_image_part(image), types.Part.from_text(text=prompt)],
    )
    out = find_inline_image(resp)
    if out is None:
        raise VisualizationError("No image data returned from Gemini")
    return out


def generate_trend_visualization(
    client: genai.Client,
    image: ProductImage,
    visual_prompt: str,
    model: str,
) -> GeneratedImage:
    prompt = VISUALIZATION_PROMPT.format(visual_prompt=visual_prompt)
    out = _generate_image(client, image, prompt, model)
    logger.info("visualization (%s): %d bytes %s", model, len(out.data), out.mime_type)
    return out


def generate_medium_mockup(
    client: genai.Client,
    image: ProductImage,
    medium: MarketingMedium,
    model: str,
) -> GeneratedImage:
    out = _generate_image(client, image, medium.prompt, model)
    logger.info("mockup %s (%s): %d bytes", medium.id, model, len(out.data))
    return out


def analyze_product(client: genai.Client, image: ProductImage, model: str) -> str:
    """Return a short product category for the uploaded photo ("" when the model gives nothing)."""
    resp = client.models.generate_content(
        model=model,
        contents=[types.Part.from_text(text=PRODUCT_CATEGORY_PROMPT), _image_part(image)],
    )
    raw = (getattr(resp, "text", "") or "").strip()
    first = raw.splitlines()[0] if raw else ""
    return first.strip().strip("*_\"'.").strip()
