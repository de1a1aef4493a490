from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .errors import RequestError
from .models import AspectRatio

ASPECT_RATIOS: Tuple[AspectRatio, ...] = (
    AspectRatio("Square (1:1)", "1:1", "1024x1024 - Social media", "square_hd"),
    AspectRatio("Landscape (16:9)", "16:9", "1920x1080 - Widescreen", "landscape_16_9"),
    AspectRatio("Portrait (9:16)", "9:16", "1080x1920 - Mobile", "portrait_16_9"),
    AspectRatio("Wide (21:9)", "21:9", "Ultrawide cinematic", "landscape_16_9"),
    AspectRatio("Photo (4:3)", "4:3", "Classic photo", "landscape_4_3"),
)
DEFAULT_RATIO = ASPECT_RATIOS[0]

# Model families that take an "image_size" preset instead of "aspect_ratio"
IMAGE_SIZE_FAMILIES = ("flux", "recraft")

@dataclass(frozen=True)
class GenerationRequest:
    model_id: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps({"model": self.model_id, "input": self.arguments}, indent=2, ensure_ascii=False)

def find_ratio(value: str) -> AspectRatio:
    for r in ASPECT_RATIOS:
        if r.value == (value or "").strip():
            return r
    return DEFAULT_RATIO

def uses_image_size(model_id: str) -> bool:
    mid = (model_id or "").lower()
    return any(f in mid for f in IMAGE_SIZE_FAMILIES)

def build_request(model_id: str, prompt: str, ratio: str = "1:1") -> GenerationRequest:
    model_id = (model_id or "").strip()
    prompt = (prompt or "").strip()
    if not model_id:
        raise RequestError("Select a model")
    if not prompt:
        raise RequestError("Enter a prompt")

    r = find_ratio(ratio)
    args: Dict[str, Any] = {"prompt": prompt}
    if uses_image_size(model_id):
        args["image_size"] = r.image_size
    else:
        args["aspect_ratio"] = r.value
    return GenerationRequest(model_id=model_id, arguments=args)
