"""
Structured app record produced from a detail page.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime


@dataclass
class AppRecord:
    url: str
    reference_date: str = field(
        default_factory=lambda: datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    )
    name: str = ""
    developer: str = ""
    developer_url: str = ""
    category: str = ""
    is_free: bool = True
    price: str = ""
    score: float | None = None
    rating_count: int | None = None
    description: str = ""
    cover_image_url: str = ""
    last_update: str = ""
    app_size: str = ""
    installs: str = ""
    current_version: str = ""
    min_os_version: str = ""
    content_rating: str = ""
    developer_email: str = ""
    developer_website: str = ""
    has_in_app_purchases: bool = False

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        lines = [f"{name}: {value}" for name, value in self.to_dict().items()
                 if name != "description"]
        return "\n".join(lines) + "\n"
