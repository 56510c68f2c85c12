# trend_models.py — value records shared by the service, workflow and UI

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class AppState(str, Enum):
    IDLE = "IDLE"
    ANALYZING_PRODUCT = "ANALYZING_PRODUCT"
    RESEARCHING = "RESEARCHING"
    VISUALIZING = "VISUALIZING"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class GroundingSource:
    title: str
    uri: str


@dataclass
class GeneratedImage:
    data: bytes
    mime_type: str = "image/png"


@dataclass
class ProductImage:
    """Uploaded product photo, kept as raw bytes for inline request parts."""
    data: bytes
    mime_type: str = "image/png"
    name: str = "product.png"


@dataclass
class Trend:
    id: str
    title: str
    story: str
    visual_prompt: str
    image: Optional[GeneratedImage] = None
    loading: bool = False
    error: Optional[str] = None

    def mark_loading(self) -> None:
        self.loading = True
        self.error = None

    def mark_rendered(self, image: GeneratedImage) -> None:
        self.image = image
        self.error = None
        self.loading = False

    def mark_failed(self, message: str) -> None:
        self.image = None
        self.error = message
        self.loading = False

    def to_dict(self) -> dict:
        # image bytes stay out of exported JSON
        return {
            "id": self.id,
            "title": self.title,
            "story": self.story,
            "visual_prompt": self.visual_prompt,
            "has_image": self.image is not None,
            "error": self.error,
        }


@dataclass
class ResearchResult:
    trends: List[Trend] = field(default_factory=list)
    sources: List[GroundingSource] = field(default_factory=list)
    product_category: str = ""


@dataclass(frozen=True)
class MarketingMedium:
    id: str
    name: str
    prompt: str
    icon: str
