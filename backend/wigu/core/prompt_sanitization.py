"""Sanitization of free text embedded in generation prompts.

Self and advisor responses are user-supplied and are quoted verbatim in
the synthesis prompt. Role markers, prompt-structure tags and instruction
overrides are neutralised so a response cannot steer the classifier.
"""

import re
import unicodedata

_REPLACEMENT_TAG = "[TAG]"
_REPLACEMENT_FILTERED = "[FILTERED]"

# Invisible characters that can split a keyword to dodge the filters below
_ZERO_WIDTH_PATTERN = re.compile("[\u00ad\u200b-\u200f\u202a-\u202e\u2060-\u2064\ufeff]")

# Control characters except tab, newline and carriage return
_CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# (pattern, replacement, flags)
_INJECTION_PATTERNS: list[tuple[str, str, int]] = [
    (r"^\s*(SYSTEM|Human|Assistant)\s*:", _REPLACEMENT_FILTERED + ":", re.I | re.M),
    (r"<\s*/?\s*(system|user|assistant)\s*>", _REPLACEMENT_TAG, re.I),
    # Prompt structure tags (<self_response>, <advisor_response>, ...)
    (r"<\s*/?\s*[a-z]+(?:_[a-z]+)+(?:\s[^>]*)?\s*>", _REPLACEMENT_TAG, re.I),
    (r"<\|(system|user|assistant|im_start|im_end)\|>", _REPLACEMENT_TAG, re.I),
    (r"\[/?INST\]", _REPLACEMENT_FILTERED, re.I),
    (r"ignore\s+(all\s+)?previous\s+instructions?", _REPLACEMENT_FILTERED, re.I),
    (r"disregard\s+(all\s+)?(prior|previous)", _REPLACEMENT_FILTERED, re.I),
    (r"new\s+instructions?\s*:", _REPLACEMENT_FILTERED + ":", re.I),
]


def sanitize_prompt_text(text: str) -> str:
    """Neutralise prompt-injection patterns in user-provided text.

    Args:
        text: Raw response text.

    Returns:
        Text safe to quote inside a prompt. Ordinary prose is unchanged
        apart from Unicode compatibility normalisation.
    """
    if not text:
        return text

    # NFKC folds fullwidth and styled letters (Ｓ → S) before matching
    result = unicodedata.normalize("NFKC", text)
    result = _ZERO_WIDTH_PATTERN.sub("", result)
    result = _CONTROL_CHAR_PATTERN.sub("", result)

    for pattern, replacement, flags in _INJECTION_PATTERNS:
        result = re.sub(pattern, replacement, result, flags=flags)

    return result
