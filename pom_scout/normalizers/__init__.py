"""Normalizers that prepare raw element descriptors for comparison."""

from .descriptor import DEFAULT_TEXT_LIMIT, DescriptorNormalizer
from .noise import NOISE_RULES, NoiseFilter, NoiseFilterResult

__all__ = [
    "DEFAULT_TEXT_LIMIT",
    "DescriptorNormalizer",
    "NOISE_RULES",
    "NoiseFilter",
    "NoiseFilterResult",
]
