"""Utilities for generating filesystem-safe names."""

import re
import unicodedata


def safe_filename(text: str) -> str:
    """
    Convert text to a name that is safe to use as a single path component.

    Letters, digits, dots, hyphens and underscores are kept as-is (GitHub
    repository names only use these); anything else becomes a hyphen.

    Example: "my repo/../x" -> "my-repo-..-x"
    """
    # Normalize unicode characters
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = re.sub(r"[^A-Za-z0-9._\-]", "-", text)

    # Collapse runs of hyphens and never start with a dot (hidden files, "..")
    text = re.sub(r"-+", "-", text).strip("-").lstrip(".")

    return text or "unnamed"
