from .renderer import DrawStyle, Renderer
from .recording import RecordingRenderer


__all__ = [
    "DrawStyle",
    "Renderer",
    "RecordingRenderer",
]
