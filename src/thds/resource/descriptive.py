import typing as ty
from dataclasses import dataclass

from .core import AbstractResource
from .errors import NotFoundError


@dataclass(frozen=True)
class DescriptiveResource(AbstractResource):
    """Placeholder for where a Resource is required but none is actually available -
    it never exists, and only describes itself.
    """

    label: str

    def exists(self) -> bool:
        return False

    def is_readable(self) -> bool:
        return False

    def open(self) -> ty.BinaryIO:
        raise NotFoundError(
            f"{self.label} cannot be opened because it does not point to a readable resource"
        )

    def description(self) -> str:
        return self.label
