"""
Prompt Builders

Turns retrieved story text into the JSON-only prompts sent to the
generator. Every prompt spells out the exact JSON shape expected, since
the orchestrator validates replies against pydantic models.
"""

from app.services.rag.models import Chunk, RetrievalContext
from app.services.rag.retriever import format_page_ref

AUDIENCE = "a young child (age 5-10)"


def format_chunk_sections(chunks: list[Chunk]) -> str:
    """All chunks, each headed by its page reference."""
    return "\n\n".join(
        f"[{format_page_ref(c.pageNums)}]:\n{c.text}" for c in chunks
    )


def compile_topics_prompt(chunks: list[Chunk], count: int) -> str:
    """Ask for `count` concrete question topics spread across the story."""
    example = ",\n".join(
        '    { "topic": "...", "type": "multiple_choice" }' for _ in range(count)
    )
    return f"""You are a children's English teacher preparing a quiz for {AUDIENCE} about a story they just read.

Here is the story divided into sections:

{format_chunk_sections(chunks)}

Generate exactly {count} specific question TOPICS — short descriptions of what each question should ask about. Cover different parts of the story.

Rules:
- All {count} topics are for multiple-choice questions
- Each topic MUST reference a specific detail, character action, or event from a specific section
- Do NOT use generic topics like "What is the story about?" or "Who is the main character?"
- Each topic should be 1 sentence

Return ONLY a JSON object:
{{
  "topics": [
{example}
  ]
}}"""


def compile_grounded_quiz_prompt(contexts: list[RetrievalContext]) -> str:
    """Ask for one question per topic, using only that topic's retrieved text."""
    sections = "\n\n".join(
        f"""--- Question {i + 1} (multiple_choice) ---
Topic: {ctx.queryText}
Relevant story text ({ctx.pageRef}):
{ctx.text}
Page reference: {ctx.pageRef}"""
        for i, ctx in enumerate(contexts)
    )

    return f"""You are a children's English teacher. Generate quiz questions for {AUDIENCE} based on the story context provided for each topic.

{sections}

For each topic above, generate ONE question. Return ONLY a JSON object:
{{
  "questions": [
    {{
      "type": "multiple_choice",
      "question": "the question text",
      "options": ["first option", "second option", "third option", "fourth option"],
      "correct": 0,
      "explanation": "why this answer is correct",
      "pageRef": "the page reference from above"
    }}
  ]
}}

Rules:
- Generate exactly {len(contexts)} questions
- Keep language simple and encouraging
- Questions must be answerable from the provided text
- Include the exact pageRef provided for each question
- Do NOT prefix options with letters like "A." or "B)"
- Generate questions in the same order as the topics above"""


def compile_fallback_quiz_prompt(story_text: str, count: int) -> str:
    """Ungrounded quiz over the whole story (no retrieval)."""
    return f"""You are a children's English teacher. Based on the following story, create a short quiz to test {AUDIENCE}'s comprehension of the English text.

Story:
{story_text}

Return ONLY a JSON object (no markdown, no code fences) with:
{{
  "questions": [
    {{
      "type": "multiple_choice",
      "question": "the question text",
      "options": ["first option", "second option", "third option", "fourth option"],
      "correct": 0,
      "explanation": "why this answer is correct"
    }}
  ]
}}

Generate exactly {count} multiple-choice questions. Do NOT prefix options with letters. Keep language simple and encouraging."""


_CHAT_OUTPUT_FORMAT = """Return ONLY a JSON object:
{
  "isRelevant": true or false,
  "answer": "your answer in English",
  "translatedAnswer": "the same answer in the child's language, or null if they asked in English",
  "detectedLanguage": "the language the question was asked in, e.g. English, Hindi, Spanish"
}

If not relevant, use an answer like: "That's a great question, but let's focus on the story! Try asking me something about what happened in the book.\""""


def compile_grounded_chat_prompt(question: str, context: RetrievalContext) -> str:
    """Answer from retrieved chunks only, judging relevance with the score."""
    passages = "\n\n".join(
        f"[{format_page_ref(s.chunk.pageNums)}]:\n{s.chunk.text}"
        for s in context.topScoredChunks
    )
    return f"""You are a friendly children's reading helper. A young child (age 5-10) just read a story and wants to ask a question about it.

Most relevant parts of the story:
{passages}

Similarity score of the best matching part: {context.top_score:.3f} (0 = unrelated, 1 = identical; below 0.3 usually means the question is not about the story)

The child asks: "{question}"

Instructions:
1. Detect the language of the question.
2. Decide whether the question is about the story, using both the story parts above and the similarity score. Questions about weather, math, personal questions, or anything unrelated are NOT relevant.
3. If it IS relevant, answer in English in 2-3 simple sentences a child would understand, using ONLY the story parts above.
4. If the question is not in English, also give the same answer translated into that language in "translatedAnswer".
5. Always name the detected language in "detectedLanguage".

{_CHAT_OUTPUT_FORMAT}"""


def compile_fallback_chat_prompt(question: str, story_text: str) -> str:
    """Same answer contract, but with the whole story instead of retrieved parts."""
    return f"""You are a friendly children's reading helper. A young child (age 5-10) just read a story and wants to ask a question about it.

Story:
{story_text}

The child asks: "{question}"

Instructions:
1. Detect the language of the question.
2. Decide whether the question is related to the story above. Questions about weather, math, personal questions, or anything unrelated are NOT relevant.
3. If it IS relevant, answer in English in 2-3 simple sentences a child would understand.
4. If the question is not in English, also give the same answer translated into that language in "translatedAnswer".
5. Always name the detected language in "detectedLanguage".

{_CHAT_OUTPUT_FORMAT}"""
