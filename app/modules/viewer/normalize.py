import math
from dataclasses import dataclass
from typing import Iterable, Tuple

Vector = Tuple[float, float, float]


@dataclass(frozen=True)
class BoundingBox:
    min: Vector
    max: Vector

    @classmethod
    def from_points(cls, points: Iterable[Vector]) -> "BoundingBox":
        points = list(points)
        if not points:
            raise ValueError("Cannot build a bounding box from no points")
        xs, ys, zs = zip(*points)
        return cls((min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs)))

    @property
    def size(self) -> Vector:
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    @property
    def center(self) -> Vector:
        return tuple((lo + hi) / 2 for lo, hi in zip(self.min, self.max))

    @property
    def diagonal(self) -> float:
        return math.sqrt(sum(s * s for s in self.size))


@dataclass(frozen=True)
class ModelTransform:
    position: Vector
    scale: float

    def apply(self, point: Vector) -> Vector:
        return tuple(c * self.scale + p for c, p in zip(point, self.position))


def normalize_model(bounds: BoundingBox, target_size: float = 3.0) -> ModelTransform:
    """Uniform scale so the box diagonal equals target_size, centered on x/z, resting on y=0."""
    diagonal = bounds.diagonal
    scale = target_size / diagonal if diagonal > 0 else 1.0
    cx, _, cz = bounds.center
    return ModelTransform(
        position=(-cx * scale, -bounds.min[1] * scale, -cz * scale),
        scale=scale,
    )
