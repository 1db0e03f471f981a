from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class UserComment:
    """A reader comment marked up as a schema.org Comment item."""

    user: str = ""
    text: str = ""
    dateCreated: str = ""


@dataclass(frozen=True)
class ExtractionResult:
    """Everything extracted from one document snapshot."""

    title: str = ""
    lastModified: str = ""
    author: str = ""
    description: str = ""
    text: str = ""
    images: tuple[str, ...] = field(default_factory=tuple)
    comments: tuple[UserComment, ...] = field(default_factory=tuple)
    externalLinks: tuple[str, ...] = field(default_factory=tuple)
    isArticle: bool = False

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary keyed by the public field names."""
        data = asdict(self)
        data["images"] = list(self.images)
        data["comments"] = [asdict(comment) for comment in self.comments]
        data["externalLinks"] = list(self.externalLinks)
        return data
