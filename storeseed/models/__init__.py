from storeseed.models.document import Document

__all__ = [
    "Document",
]
