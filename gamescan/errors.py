from dataclasses import dataclass
from typing import Optional


class ScanError(Exception):
    """Fatal condition for a single scan run."""


@dataclass(eq=False)
class HttpError(ScanError):
    url: str
    status: Optional[int] = None
    detail: str = ""

    def __str__(self) -> str:
        if self.status is None:
            return f"request failed for {self.url}: {self.detail}"
        text = f"{self.status} for {self.url}"
        if self.detail:
            text += f"\n{self.detail}"
        return text


class DataShapeError(ScanError):
    pass
