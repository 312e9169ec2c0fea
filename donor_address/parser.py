"""
Legacy donor address parser.

Turns a free-text address such as "12 MG Road, Pune, Maharashtra - 411001"
into a StructuredAddress. Parsing is best-effort and deterministic: the same
string always produces the same result, and nothing is looked up outside the
gazetteer handed to the parser.

Steps:
1. Pull a trailing six-digit pincode (and its "-" / whitespace separator).
2. Split what is left on commas, dropping empty pieces.
3. Scan the pieces right to left for a gazetteer region; the piece before
   it is the city and everything earlier is the street line.
4. Without a region match, fall back on position (last = state,
   second-to-last = city) for 3+ pieces, or line/city for 2.
"""

import re
from typing import Any, List, Optional, Tuple

from .gazetteer import INDIAN_GAZETTEER, Gazetteer
from .models import StructuredAddress

# Six digits at the very end, not part of a longer number, with any run of
# hyphens/whitespace before them treated as the separator.
PINCODE_SUFFIX = re.compile(r"[\s-]*(?<!\d)(\d{6})\s*$")


def split_pincode(address: str) -> Tuple[str, str]:
    """
    Separate a trailing pincode from the rest of an address.

    Returns:
        (working address without the pincode segment, pincode or "")
    """
    match = PINCODE_SUFFIX.search(address)
    if not match:
        return address.strip(), ""
    return address[: match.start()].strip(), match.group(1)


def split_segments(address: str) -> List[str]:
    """Comma-split, trimmed, empties dropped."""
    return [part.strip() for part in address.split(",") if part.strip()]


class AddressParser:
    """Pure legacy-string to StructuredAddress mapping over a fixed gazetteer."""

    def __init__(self, gazetteer: Gazetteer = INDIAN_GAZETTEER):
        self.gazetteer = gazetteer

    def find_region(self, segments: List[str]) -> Tuple[int, Optional[str]]:
        """Return (index, canonical region) of the rightmost segment naming a region, or (-1, None)."""
        for index in range(len(segments) - 1, -1, -1):
            region = self.gazetteer.match(segments[index])
            if region:
                return index, region
        return -1, None

    def parse(self, raw: Any) -> StructuredAddress:
        """
        Parse a legacy address string.

        Args:
            raw: The stored address. None, non-strings and "" give an empty address.

        Returns:
            StructuredAddress with country always set to the default
        """
        if not raw or not isinstance(raw, str):
            return StructuredAddress()

        working, pincode = split_pincode(raw)
        segments = split_segments(working)

        if not segments:
            # Nothing but separators (or only a pincode); keep the text as the line
            # minus the pincode so the pincode is never duplicated there.
            return StructuredAddress(line=working if pincode else raw, pincode=pincode)

        line, city, state = "", "", ""
        state_index, region = self.find_region(segments)

        if region is not None:
            state = region
            if state_index > 0:
                city = segments[state_index - 1]
                line = ", ".join(segments[: state_index - 1])
            else:
                # Region leads the address: no city before it, keep the full text as the line.
                # Intentionally no positional fallback here: "Goa Road, Pune" must not
                # turn "Pune" into a city once a region has matched.
                line = ", ".join(segments)
        elif len(segments) >= 3:
            state = segments[-1]
            city = segments[-2]
            line = ", ".join(segments[:-2])
        elif len(segments) == 2:
            line, city = segments
        else:
            line = segments[0]

        return StructuredAddress(line=line, city=city, state=state, pincode=pincode)


_default_parser = AddressParser()


def parse_address(raw: Any) -> StructuredAddress:
    """Parse with the default Indian gazetteer."""
    return _default_parser.parse(raw)
