from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass
class FieldConfig:
    count: int = 80                                  # particles per field
    speed_range: float = 0.25                        # |speed| per axis, units/frame
    size_range: Tuple[float, float] = (1.0, 4.0)     # radius, [lo, hi)
    opacity_range: Tuple[float, float] = (0.2, 0.7)  # fill alpha, [lo, hi)
    proximity_threshold: float = 120.0               # edge cutoff (strict <)
    line_alpha_max: float = 0.1                      # edge alpha at distance 0
    line_width: float = 1.0
    color: Tuple[int, int, int] = (0, 0, 0)          # particle + edge rgb
    background: Tuple[int, int, int] = (255, 255, 255)
    frame_interval_ms: int = 16                      # ~60 fps
    grid_index_min_count: int = 300                  # switch to grid above this
    seed: Optional[int] = None

    def validate(self) -> None:
        if self.count <= 0:
            raise ValueError(f"count must be positive, got {self.count}")
        if self.speed_range < 0:
            raise ValueError(f"speed_range must be >= 0, got {self.speed_range}")
        lo, hi = self.size_range
        if not (0 < lo < hi):
            raise ValueError(f"size_range must satisfy 0 < lo < hi, got {self.size_range}")
        lo, hi = self.opacity_range
        if not (0.0 <= lo < hi <= 1.0):
            raise ValueError(f"opacity_range must lie in [0, 1] with lo < hi, got {self.opacity_range}")
        if self.proximity_threshold <= 0:
            raise ValueError(f"proximity_threshold must be positive, got {self.proximity_threshold}")
        if not (0.0 <= self.line_alpha_max <= 1.0):
            raise ValueError(f"line_alpha_max must lie in [0, 1], got {self.line_alpha_max}")
        if self.frame_interval_ms <= 0:
            raise ValueError(f"frame_interval_ms must be positive, got {self.frame_interval_ms}")
        if self.grid_index_min_count <= 0:
            raise ValueError(f"grid_index_min_count must be positive, got {self.grid_index_min_count}")
