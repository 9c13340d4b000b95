from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """One parsed blog post. The body is kept exactly as written."""

    model_config = ConfigDict(frozen=True)

    layout: str
    title: str
    keywords: Optional[str] = None
    body: str
    extra: Dict[str, str] = Field(default_factory=dict)

    @property
    def metadata(self) -> Dict[str, str]:
        """Front matter as it would be written back, known keys first."""
        metadata = {"layout": self.layout, "title": self.title}
        if self.keywords is not None:
            metadata["keywords"] = self.keywords
        metadata.update(self.extra)
        return metadata
