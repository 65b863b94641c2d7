"""Domain layer: errors and schemas."""

from .errors import (
    DocGenError,
    InvalidTemplateTypeError,
    RenderFailedError,
    TemplateNotFoundError,
)
from .schemas import RenderedDocument, TemplateKind

__all__ = [
    "DocGenError",
    "TemplateNotFoundError",
    "InvalidTemplateTypeError",
    "RenderFailedError",
    "RenderedDocument",
    "TemplateKind",
]
