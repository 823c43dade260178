# renderer/settings.py
import os
from dataclasses import dataclass, replace
from typing import Optional

# Named presets: samples per pixel, max bounces, resolution scale
QUALITY_LEVELS = {
    "interactive": {"samples": 4, "bounces": 4, "scale": 0.5},
    "balanced": {"samples": 32, "bounces": 16, "scale": 0.67},
    "high_quality": {"samples": 100, "bounces": 50, "scale": 1.0},
}

BACKENDS = ("process", "thread")

@dataclass(frozen=True)
class RenderSettings:
    """
    Everything the render loop needs besides the scene and the camera.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Camera rays averaged per pixel.
        max_depth: Bounce limit; depth 0 contributes black.
        workers: Worker count; 0 or 1 renders in the calling thread.
        backend: "process" (one scene copy per worker) or "thread".
        seed: Base seed; each row is seeded from it, so a render is
            reproducible regardless of how rows are scheduled. None
            draws fresh entropy.
        t_min: Start of the valid hit interval along every ray.
    """
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    workers: int = 0
    backend: str = "process"
    seed: Optional[int] = None
    t_min: float = 0.001

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.workers < 0:
            raise ValueError(f"workers must not be negative, got {self.workers}")
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend {self.backend!r}, expected one of {BACKENDS}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def with_overrides(self, **overrides) -> "RenderSettings":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def for_quality(cls, name: str, width: int = 800, aspect_ratio: float = 16 / 9,
                    **overrides) -> "RenderSettings":
        """
        Builds settings from a named preset scaled from a base width.
        Explicit keyword overrides (that are not None) win over the preset.
        """
        try:
            quality = QUALITY_LEVELS[name]
        except KeyError:
            raise ValueError(f"Unknown quality {name!r}, expected one of {sorted(QUALITY_LEVELS)}") from None
        scaled_width = max(1, int(width * quality["scale"]))
        settings = cls(
            width=scaled_width,
            height=max(1, int(scaled_width / aspect_ratio)),
            samples_per_pixel=quality["samples"],
            max_depth=quality["bounces"],
        )
        return settings.with_overrides(**overrides)

def default_workers() -> int:
    return os.cpu_count() or 1
