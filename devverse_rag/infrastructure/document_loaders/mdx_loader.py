import logging
import re
from pathlib import Path

from devverse_rag.core.models.document import Article

logger = logging.getLogger(__name__)

_METADATA_BLOCK = re.compile(r"export const metadata = \{([\s\S]*?)\};")
_TITLE = re.compile(r"title:\s*(['\"])([\s\S]*?)\1")
_DESCRIPTION = re.compile(r"description:\s*(['\"])([\s\S]*?)\1")
_TOPICS = re.compile(r"topics:\s*\[([\s\S]*?)\]")


def parse_metadata(text: str, slug: str) -> tuple[str, str, list[str]]:
    """Read title, description and topics from an ``export const metadata`` block."""
    block = _METADATA_BLOCK.search(text)
    if not block:
        return slug, "", []

    metadata = block.group(1)
    title = _TITLE.search(metadata)
    description = _DESCRIPTION.search(metadata)
    topics_match = _TOPICS.search(metadata)

    topics = []
    if topics_match:
        topics = [
            t.strip().replace('"', "").replace("'", "")
            for t in topics_match.group(1).split(",")
        ]
        topics = [t for t in topics if t]

    return (
        title.group(2) if title else slug,
        description.group(2) if description else "",
        topics,
    )


def extract_body(text: str) -> str:
    """Article body from the first heading onward."""
    block = _METADATA_BLOCK.search(text)
    offset = block.end() if block else 0
    start = text.find("#", offset)
    if start == -1:
        return ""
    return text[start:].replace("\r\n", "\n").strip()


class MdxArticleLoader:

    EXTENSIONS = {".mdx"}

    def __init__(self, content_dir: str = "./content"):
        self._content_dir = Path(content_dir)

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONS

    def load(self, file_path: Path) -> Article:
        text = file_path.read_text(encoding="utf-8", errors="replace")
        slug = file_path.stem
        title, description, topics = parse_metadata(text, slug)
        return Article(
            slug=slug,
            title=title,
            description=description,
            topics=topics,
            body=extract_body(text),
        )

    def load_all(self) -> list[Article]:
        if not self._content_dir.exists():
            logger.error(f"Content path not found: {self._content_dir}")
            return []

        return [
            self.load(path)
            for path in sorted(self._content_dir.iterdir())
            if path.is_file() and self.supports(path)
        ]
