"""
Story and retrieval data types.

Pages arrive from the client (already OCR'd and translated). Chunks,
scored chunks and retrieval contexts are built per request and thrown
away afterwards; nothing here is persisted.
"""

from pydantic import BaseModel, ConfigDict


class VocabEntry(BaseModel):
    english: str
    original: str


class Page(BaseModel):
    model_config = ConfigDict(frozen=True)

    pageNum: int
    originalText: str = ""
    translatedText: str = ""
    vocab: list[VocabEntry] = []
    isIllustration: bool = False

    @property
    def is_eligible(self) -> bool:
        """Only text pages take part in chunking."""
        return not self.isIllustration and bool(self.translatedText.strip())


class Chunk(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int  # Emission index within one chunking run
    pageNums: list[int]
    text: str
    originalText: str
    vocab: list[VocabEntry] = []
    embedding: list[float] | None = None  # Attached once via model_copy


class ScoredChunk(BaseModel):
    chunk: Chunk
    score: float


class RetrievalContext(BaseModel):
    queryText: str
    topScoredChunks: list[ScoredChunk]
    pageRef: str

    @property
    def text(self) -> str:
        return "\n".join(s.chunk.text for s in self.topScoredChunks)

    @property
    def top_score(self) -> float:
        return self.topScoredChunks[0].score if self.topScoredChunks else 0.0


__all__ = [
    "VocabEntry",
    "Page",
    "Chunk",
    "ScoredChunk",
    "RetrievalContext",
]
