from .content import ContentResponse

__all__ = [
    "ContentResponse",
]
