"""Text processing and sanitization utilities."""
import re

# Characters sent to the model per resume
MAX_TEXT_LENGTH = 8000
# Below this, a resume is treated as having no usable text
MIN_TEXT_LENGTH = 50


def sanitize_for_json(text: str) -> str:
    """Remove control characters that break JSON prompts."""
    text = text.replace('\x00', '')  # null bytes
    text = text.replace('\x0b', ' ')  # vertical tab
    text = text.replace('\x0c', ' ')  # form feed
    text = text.replace('\r\n', '\n')
    text = text.replace('\r', '\n')
    return ''.join(char for char in text if ord(char) >= 32 or char in '\n\t')


def normalize_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Collapse whitespace runs to single spaces, trim, and cap the length."""
    if not text:
        return ""
    text = sanitize_for_json(text)
    text = re.sub(r"\s+", " ", text).strip()
    return text[:max_length]


def has_sufficient_content(text: str, min_length: int = MIN_TEXT_LENGTH) -> bool:
    """Whether cleaned text is long enough to be worth an AI call."""
    return bool(text) and len(text) >= min_length


def extract_json(text: str) -> str:
    """Extract the JSON object from an LLM response."""
    # Try to find JSON in markdown code blocks first
    markdown_match = re.search(r'```(?:json)?\s*(\{[\s\S]*?\})\s*```', text)
    if markdown_match:
        json_str = markdown_match.group(1)
    else:
        match = re.search(r'\{[\s\S]*\}', text)
        if not match:
            raise ValueError("No JSON found in LLM response")
        json_str = match.group(0)

    return json_str.strip()
