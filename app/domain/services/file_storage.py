"""
File reference service interface.
Stores uploaded receipt files and hands back a URL the entry can keep.
"""

from abc import ABC, abstractmethod


RECEIPT_CONTENT_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/pdf",
)


class FileStorage(ABC):
    """
    File storage interface.
    Implementations decide where bytes live; callers only keep the returned URL.
    """

    @abstractmethod
    async def upload(self,
                     content: bytes,
                     filename: str,
                     content_type: str,
                     owner_id: str) -> str:
        """
        Store a file for ``owner_id`` and return a URL referencing it.
        """
        pass
