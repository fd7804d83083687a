"""Reporters that turn grouped elements into files."""

from .basepage import (
    generate_basepage_code,
    page_label,
    write_basepage_code,
)
from .json_report import (
    build_pom_report,
    write_pom_report,
)

__all__ = [
    "build_pom_report",
    "generate_basepage_code",
    "page_label",
    "write_basepage_code",
    "write_pom_report",
]
