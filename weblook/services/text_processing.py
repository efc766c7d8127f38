"""
Text processing for extracted web pages: cleaning and truncation.

Pages come back with navigation debris, repeated lines and mixed unicode.
Cleaning keeps the context handed to the LLM dense and readable.
"""

import unicodedata


def clean_text(text: str) -> str:
    """
    Normalize extracted page text.

    NFKC-normalizes, strips every line, drops consecutive duplicate lines and
    collapses runs of blank lines to a single blank line between paragraphs.
    """
    if not text or not text.strip():
        return ""
    text = unicodedata.normalize("NFKC", text).replace("\u200b", "")
    lines = [" ".join(line.split()) for line in text.splitlines()]
    deduped: list[str] = []
    for line in lines:
        if deduped and deduped[-1] == line:
            continue
        deduped.append(line)
    result: list[str] = []
    for line in deduped:
        if line == "":
            if result and result[-1] != "":
                result.append("")
        else:
            result.append(line)
    return "\n".join(result).strip()


def truncate_text(text: str, max_chars: int) -> str:
    """Cut text to at most max_chars, preferring the last whitespace before the limit."""
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    cut = text[:max_chars]
    space = cut.rfind(" ")
    if space > max_chars // 2:
        cut = cut[:space]
    return cut.rstrip()
