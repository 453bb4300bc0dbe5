"""Inclusive page ranges and their Plex container query parameters."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PageRange(BaseModel):
    """An inclusive range of item offsets, `start..end`."""
    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "PageRange":
        if self.end < self.start:
            raise ValueError(f"range end {self.end} is before start {self.start}")
        return self

    @classmethod
    def from_offset(cls, offset: int, size: int) -> "PageRange":
        """Range covering `size` items starting at `offset`."""
        return cls(start=offset, end=offset + size - 1)

    @property
    def count(self) -> int:
        return self.end - self.start + 1


def page_query_items(page: PageRange) -> list[tuple[str, str]]:
    """Container offset/size parameters for a page range."""
    return [
        ("X-Plex-Container-Start", str(page.start)),
        ("X-Plex-Container-Size", str(page.count)),
    ]
