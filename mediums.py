# mediums.py — marketing mockup targets

from typing import Dict, List

from trend_models import MarketingMedium

MARKETING_MEDIUMS: List[MarketingMedium] = [
    MarketingMedium(
        id="mug",
        name="Coffee Mug",
        prompt=(
            "Place this exact product logo and design onto a clean ceramic coffee mug held by a person "
            "in a minimalist cafe setting. Ensure the product logo is visible and maintains its original "
            "colors and proportions."
        ),
        icon="☕",
    ),
    MarketingMedium(
        id="tshirt",
        name="T-Shirt",
        prompt=(
            "Show this product design printed on the chest of a high-quality cotton t-shirt worn by a "
            "lifestyle model. The t-shirt color should complement the brand. The logo must be sharp and centered."
        ),
        icon="👕",
    ),
    MarketingMedium(
        id="billboard",
        name="City Billboard",
        prompt=(
            "Display this product on a massive high-tech digital billboard overlooking a busy metropolitan "
            "intersection at twilight. The advertisement should look cinematic and professional."
        ),
        icon="🏢",
    ),
    MarketingMedium(
        id="tote",
        name="Tote Bag",
        prompt=(
            "Visualize this product branding on an eco-friendly canvas tote bag sitting on a wooden table "
            "next to some fresh flowers. Natural sunlight lighting."
        ),
        icon="👜",
    ),
    MarketingMedium(
        id="social",
        name="Social Media Post",
        prompt=(
            "A sleek, professional social media flat-lay composition featuring this product surrounded by "
            "premium lifestyle accessories and soft aesthetic shadows."
        ),
        icon="📱",
    ),
    MarketingMedium(
        id="packaging",
        name="Premium Box",
        prompt=(
            "Apply this brand design to a premium matte finish cardboard packaging box. "
            "Luxury presentation with studio lighting."
        ),
        icon="📦",
    ),
]

_BY_ID: Dict[str, MarketingMedium] = {m.id: m for m in MARKETING_MEDIUMS}


def get_medium(medium_id: str) -> MarketingMedium:
    return _BY_ID[medium_id]
