import pytest

import gemini_service
from conftest import TREND_TEXT, FakeClient, empty_response, image_response, text_response
from mediums import get_medium
from trend_models import ProductImage

PRODUCT = ProductImage(data=b"raw-product-bytes", mime_type="image/jpeg", name="can.jpg")


def test_research_uses_search_tool_and_fixed_prompt() -> None:
    client = FakeClient(text_response(TREND_TEXT, sources=[("Dezeen", "https://dezeen.example/x")]))
    result = gemini_service.research_current_trends(client, "research-m")

    call = client.models.calls[0]
    assert call["model"] == "research-m"
    assert call["contents"] == gemini_service.RESEARCH_PROMPT
    assert call["config"].tools[0].google_search is not None
    assert len(result.trends) == 3
    assert result.sources[0].title == "Dezeen"


def test_research_prompt_only_tailored_when_enabled() -> None:
    assert gemini_service.build_research_prompt("skincare serum") == gemini_service.RESEARCH_PROMPT
    tailored = gemini_service.build_research_prompt("skincare serum", tailor=True)
    assert tailored.startswith(gemini_service.RESEARCH_PROMPT)
    assert tailored.endswith("skincare serum.")
    assert gemini_service.build_research_prompt("  ", tailor=True) == gemini_service.RESEARCH_PROMPT


def test_research_handles_missing_text() -> None:
    resp = text_response("")
    resp.text = None
    result = gemini_service.research_current_trends(FakeClient(resp), "research-m")
    assert result.trends == [] and result.sources == []


def test_visualization_sends_image_then_instruction() -> None:
    client = FakeClient(image_response(b"generated", "image/png"))
    out = gemini_service.generate_trend_visualization(client, PRODUCT, "mirrored chrome plinth", "image-m")

    assert out.data == b"generated"
    call = client.models.calls[0]
    assert call["model"] == "image-m"
    image_part, text_part = call["contents"]
    assert image_part.inline_data.data == b"raw-product-bytes"
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert "mirrored chrome plinth" in text_part.text
    assert "100% consistent" in text_part.text


def test_visualization_without_image_raises() -> None:
    with pytest.raises(gemini_service.VisualizationError, match="No image data returned from Gemini"):
        gemini_service.generate_trend_visualization(FakeClient(empty_response()), PRODUCT, "x", "image-m")


def test_medium_mockup_uses_medium_prompt() -> None:
    client = FakeClient(image_response())
    medium = get_medium("billboard")
    gemini_service.generate_medium_mockup(client, PRODUCT, medium, "image-m")
    assert client.models.calls[0]["contents"][1].text == medium.prompt


def test_analyze_product_returns_first_clean_line() -> None:
    client = FakeClient(text_response("**Craft beer can**\nIt is an aluminium can."))
    assert gemini_service.analyze_product(client, PRODUCT, "analysis-m") == "Craft beer can"
    assert gemini_service.analyze_product(FakeClient(text_response("")), PRODUCT, "analysis-m") == ""


def test_no_trends_error_is_a_research_error() -> None:
    err = gemini_service.NoTrendsError()
    assert isinstance(err, gemini_service.ResearchError)
    assert str(err) == "Could not identify specific trends at this moment."
