from types import SimpleNamespace

import pytest

from settings import Settings


class FakeModels:
    """Stands in for ``client.models``: records kwargs, replays queued responses."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeClient:
    def __init__(self, *responses):
        self.models = FakeModels(responses)


def text_response(text: str, sources=()) -> SimpleNamespace:
    chunks = [SimpleNamespace(web=SimpleNamespace(title=t, uri=u)) for t, u in sources]
    cand = SimpleNamespace(
        grounding_metadata=SimpleNamespace(grounding_chunks=chunks),
        content=SimpleNamespace(parts=[SimpleNamespace(text=text, inline_data=None)]),
    )
    return SimpleNamespace(text=text, candidates=[cand])


def image_response(data: bytes = b"\x89PNG-fake", mime_type: str = "image/png") -> SimpleNamespace:
    parts = [
        SimpleNamespace(text="Here is your image", inline_data=None),
        SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
    ]
    return SimpleNamespace(text=None, candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


def empty_response() -> SimpleNamespace:
    return SimpleNamespace(text="Sorry, I can't.", candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))])


TREND_TEXT = """Here is an overview of what creative teams have been sharing across campaigns this month.

TREND 1:
Title: Dopamine Chrome
Story: Saturated neon paired with liquid chrome is everywhere after several big sneaker drops. It signals optimism and play.
Prompt: Stage the product on a mirrored chrome plinth with hot pink and electric blue gel lighting.

TREND 2:
**Title:** Quiet Luxury Stone
**Story:** Muted travertine and linen textures are dominating premium launches as brands lean into calm.
**Prompt:** Place the product on a honed travertine block with soft window light and beige linen drapes.

TREND 3:
3. Title: Y2K Flash
Story: Direct on-camera flash and grainy party snapshots are back on social feeds.
Prompt: Shoot the product with harsh direct flash against a silver tinsel curtain, slight motion blur.
"""


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", research_model="research-m", image_model="image-m", analysis_model="analysis-m")
