"""
Region reference table for legacy address parsing.

The gazetteer is a frozen lookup table of Indian state/UT names followed by
their common two-letter abbreviations. Entry order matters: the parser returns
the first entry that matches a segment, so full names win over abbreviations.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_COUNTRY = "India"

INDIAN_STATE_NAMES: Tuple[str, ...] = (
    "Andhra Pradesh",
    "Arunachal Pradesh",
    "Assam",
    "Bihar",
    "Chhattisgarh",
    "Goa",
    "Gujarat",
    "Haryana",
    "Himachal Pradesh",
    "Jharkhand",
    "Karnataka",
    "Kerala",
    "Madhya Pradesh",
    "Maharashtra",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Odisha",
    "Punjab",
    "Rajasthan",
    "Sikkim",
    "Tamil Nadu",
    "Telangana",
    "Tripura",
    "Uttar Pradesh",
    "Uttarakhand",
    "West Bengal",
    # Union territories
    "Delhi",
    "Chandigarh",
    "Puducherry",
    "Jammu and Kashmir",
    "Ladakh",
)

INDIAN_STATE_ABBREVIATIONS: Tuple[str, ...] = (
    "AP", "AR", "AS", "BR", "CG", "GA", "GJ", "HR", "HP", "JH",
    "KA", "KL", "MP", "MH", "MN", "ML", "MZ", "NL", "OD", "PB",
    "RJ", "SK", "TN", "TS", "TR", "UP", "UK", "WB", "DL", "CH",
    "PY", "JK", "LA",
)  # fmt: skip


@dataclass(frozen=True)
class Gazetteer:
    """Immutable list of known region names and abbreviations.

    Attributes:
        regions: Canonical region entries, in match-priority order
    """

    regions: Tuple[str, ...]

    def __post_init__(self):
        # Cache lowercase forms once; object.__setattr__ because the dataclass is frozen
        object.__setattr__(self, "_lowered", tuple((r.lower(), r) for r in self.regions))

    def match(self, segment: str) -> Optional[str]:
        """
        Find the canonical region mentioned in an address segment.

        A region matches when the segment equals it or contains it, both
        case-insensitively. Containment means a locality such as "Goregaon"
        will match "GA"; that looseness is accepted.

        Args:
            segment: One comma-separated piece of an address

        Returns:
            The canonical gazetteer entry, or None if nothing matches
        """
        needle = segment.strip().lower()
        if not needle:
            return None
        for lowered, canonical in self._lowered:
            if needle == lowered or lowered in needle:
                return canonical
        return None


INDIAN_GAZETTEER = Gazetteer(regions=INDIAN_STATE_NAMES + INDIAN_STATE_ABBREVIATIONS)
