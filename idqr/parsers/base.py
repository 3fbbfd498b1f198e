# idqr/parsers/base.py
"""
Helpers shared by the format-specific extractors.
"""

from typing import Iterable, Optional

ADDRESS_SEPARATOR = ", "


def join_present(parts: Iterable[Optional[str]], separator: str = ADDRESS_SEPARATOR) -> Optional[str]:
    """Join the non-blank parts in order, or None when nothing is left"""
    present = [part.strip() for part in parts if part and part.strip()]
    return separator.join(present) if present else None


def mask_for_log(value: Optional[str]) -> str:
    """Show only the last four characters of an identifier"""
    if not value:
        return "<none>"
    return f"{'*' * max(len(value) - 4, 0)}{value[-4:]}"
