from typing import Optional


class IdentifierValidator:
    """Normalizes item / member identifiers such as ``B001`` or ``DVD-01`` for lookup."""

    @staticmethod
    def normalize(raw: Optional[str]) -> str:
        if raw is None:
            return ""
        return raw.strip().upper()


class TextValidator:
    """Very basic text validations for titles and names."""

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        # "1984" is a valid title; punctuation alone is not
        if title is None:
            return False
        return any(c.isalnum() for c in title.strip())

    @staticmethod
    def validate_name(name: Optional[str]) -> bool:
        if name is None:
            return False
        return any(c.isalpha() for c in name.strip())
