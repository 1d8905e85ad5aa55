"""
Page Chunker

Groups consecutive text pages into retrieval units of at most
`max_pages` pages. Illustration pages and pages without translated text
are hard boundaries: they close the current chunk and never appear in one.

Why up to 3 pages?
- One embedding per page multiplies embedding calls for longer books
- Larger windows dilute the similarity score of any single detail
- Picture-book pages are short, so 3 pages is still one "scene"
"""

from app.services.rag.models import Chunk, Page


def chunk_pages(pages: list[Page], max_pages: int = 3) -> list[Chunk]:
    """
    Split an ordered page list into contiguous chunks (no embeddings yet).

    Args:
        pages: Pages in reading order
        max_pages: Maximum pages per chunk

    Returns:
        Chunks in emission order; ids are 0-based emission indices.
        An empty list means the story has no retrievable text.
    """
    chunks: list[Chunk] = []
    current: list[Page] = []

    def flush() -> None:
        if not current:
            return
        chunks.append(
            Chunk(
                id=len(chunks),
                pageNums=[p.pageNum for p in current],
                text="\n".join(p.translatedText for p in current),
                originalText="\n".join(p.originalText for p in current),
                vocab=[entry for p in current for entry in p.vocab],
            )
        )
        current.clear()

    for page in pages:
        if not page.is_eligible:
            flush()
            continue
        current.append(page)
        if len(current) >= max_pages:
            flush()
    flush()

    return chunks


def full_story_text(pages: list[Page]) -> str:
    """Translated text of every page with text, for the ungrounded prompts."""
    return "\n".join(p.translatedText for p in pages if p.translatedText.strip())
