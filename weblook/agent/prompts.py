"""Prompt templates for question decomposition and answer synthesis."""

DECOMPOSE_PROMPT = """You are a specialized AI assistant. Your task is to convert a user's question into 3-4 simple, direct, natural-language search engine queries.

**CRITICAL RULES:**
1.  The queries MUST be simple questions or phrases a human would type.
2.  **DO NOT** use any special operators like "site:", "filetype:", "inurl:", "intitle:". Your output must be clean, natural language.
3.  The queries should be different from each other to cover various aspects of the topic.

**User Question:**
"{question}"

**Output Format:**
Return ONLY a valid JSON object with a single key "queries" that contains an array of strings.

**Good Example:**
User Question: "What is the Mamba architecture and how does it compare to Transformers?"
Your Output:
{{
  "queries": [
    "What is Mamba AI architecture?",
    "Mamba vs Transformer key differences",
    "Benefits of Mamba architecture in AI",
    "Limitations of Transformer architecture"
  ]
}}
"""

SYNTHESIZE_PROMPT = """You are an expert writer. Your task is to answer the user's original question based *only* on the provided search results. Do not use any prior knowledge. Do not make assumptions.

If the provided information is insufficient, state that you cannot answer fully with the given data.

User's Original Question: "{question}"

--- Search Results Context ---
{context}
---

Your Final Answer:"""


def build_decompose_prompt(question: str) -> str:
    return DECOMPOSE_PROMPT.format(question=question)


def build_synthesize_prompt(question: str, context: str) -> str:
    return SYNTHESIZE_PROMPT.format(question=question, context=context)
