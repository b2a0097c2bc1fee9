"""Cheap pattern checks for code-looking text.

These are display hints for untagged blocks, not a language detector.
"""

import re

_CODE_PATTERNS = [
    re.compile(r"```[\s\S]*?```"),
    re.compile(r"`[^`]+`"),
    re.compile(r"function\s+\w+"),
    re.compile(r"const\s+\w+\s*="),
    re.compile(r"import\s+.*from"),
    re.compile(r"class\s+\w+"),
    re.compile(r"def\s+\w+"),
    re.compile(r"#include\s*<"),
    re.compile(r"<\w+.*>"),
    re.compile(r"\.\w+\("),
]

# Checked in order; the first language with any matching pattern wins.
_LANGUAGE_PATTERNS = {
    "javascript": [r"function\s+\w+", r"const\s+\w+\s*=", r"import\s+.*from", r"console\.log"],
    "python": [r"def\s+\w+", r"import\s+\w+", r"print\s*\(", r"if\s+__name__"],
    "html": [r"<html", r"<div", r"<span", r"<p", r"<h[1-6]"],
    "css": [r"\.\w+\s*{", r"#\w+\s*{", r"@media", r"@keyframes"],
    "java": [r"public\s+class", r"import\s+java", r"System\.out\.print"],
    "cpp": [r"#include\s*<", r"using\s+namespace", r"std::"],
    "sql": [r"SELECT\s+", r"INSERT\s+INTO", r"UPDATE\s+", r"DELETE\s+FROM"],
    "json": [r"^\s*{", r"^\s*\[", r"\"[\w\s]+\":"],
    "xml": [r"<\?xml", r"<[a-zA-Z][^>]*>", r"</[a-zA-Z][^>]*>"],
}

_COMPILED_LANGUAGES = {
    lang: [re.compile(p) for p in patterns]
    for lang, patterns in _LANGUAGE_PATTERNS.items()
}


def has_code_patterns(text: str) -> bool:
    """True when text contains something that looks like code."""
    return any(p.search(text) for p in _CODE_PATTERNS)


def guess_language(text: str) -> str:
    """Best-effort language name for untagged code, ``"text"`` if nothing fits."""
    for lang, patterns in _COMPILED_LANGUAGES.items():
        if any(p.search(text) for p in patterns):
            return lang
    return "text"
