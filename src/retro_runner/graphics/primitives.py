"""Basic drawing primitives on numpy RGB buffers.

Buffers are arrays of shape (height, width, 3), dtype uint8. All shapes
accept float coordinates and are clipped to the buffer.
"""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    return np.zeros((height, width, 3), dtype=np.uint8)


def _clip(buffer: Buffer, x: float, y: float, width: float, height: float) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))
    return x1, y1, x2, y2


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    t = max(1, thickness)
    buffer[y1:min(y1 + t, y2), x1:x2] = color
    buffer[max(y2 - t, y1):y2, x1:x2] = color
    buffer[y1:y2, x1:min(x1 + t, x2)] = color
    buffer[y1:y2, max(x2 - t, x1):x2] = color


def blend_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a solid rectangle over the buffer."""
    alpha = max(0.0, min(1.0, alpha))
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1 or alpha == 0.0:
        return

    region = buffer[y1:y2, x1:x2].astype(np.float32)
    blended = region * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = blended.astype(np.uint8)


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
) -> None:
    """Draw a filled axis-aligned ellipse."""
    if rx <= 0 or ry <= 0:
        return
    x1, y1, x2, y2 = _clip(buffer, cx - rx, cy - ry, 2 * rx + 1, 2 * ry + 1)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = ((xs - cx) / rx) ** 2 + ((ys - cy) / ry) ** 2 <= 1.0
    buffer[y1:y2, x1:x2][mask] = color


def draw_circle(buffer: Buffer, cx: float, cy: float, radius: float, color: Color) -> None:
    """Draw a filled circle."""
    draw_ellipse(buffer, cx, cy, radius, radius, color)


def draw_triangle(
    buffer: Buffer,
    p1: Tuple[float, float],
    p2: Tuple[float, float],
    p3: Tuple[float, float],
    color: Color,
) -> None:
    """Draw a filled triangle using edge functions over its bounding box."""
    xs_ = (p1[0], p2[0], p3[0])
    ys_ = (p1[1], p2[1], p3[1])
    x1, y1, x2, y2 = _clip(
        buffer, min(xs_), min(ys_), max(xs_) - min(xs_) + 1, max(ys_) - min(ys_) + 1
    )
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.mgrid[y1:y2, x1:x2]

    def edge(a: Tuple[float, float], b: Tuple[float, float]) -> NDArray[np.float64]:
        return (b[0] - a[0]) * (ys - a[1]) - (b[1] - a[1]) * (xs - a[0])

    e1, e2, e3 = edge(p1, p2), edge(p2, p3), edge(p3, p1)
    mask = ((e1 >= 0) & (e2 >= 0) & (e3 >= 0)) | ((e1 <= 0) & (e2 <= 0) & (e3 <= 0))
    buffer[y1:y2, x1:x2][mask] = color


def vertical_gradient(buffer: Buffer, top: Color, bottom: Color, y_end: int | None = None) -> None:
    """Fill rows 0..y_end with a linear top-to-bottom gradient."""
    h = buffer.shape[0]
    y_end = h if y_end is None else max(0, min(y_end, h))
    if y_end == 0:
        return
    t = np.linspace(0.0, 1.0, y_end, dtype=np.float32)[:, None]
    rows = np.array(top, dtype=np.float32) * (1 - t) + np.array(bottom, dtype=np.float32) * t
    buffer[:y_end, :] = rows[:, None, :].astype(np.uint8)
