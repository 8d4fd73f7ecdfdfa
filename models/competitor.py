"""
Competing units.

Competitors are opaque string identifiers. The six units of the default
deployment are enumerated here; any six distinct ids may be used instead.
"""

import enum


class Competitor(str, enum.Enum):
    """The six units that compete on field day."""
    PALCHAN = "palchan"
    PALSAR = "palsar"
    PALNAT = "palnat"
    PALTAZ = "paltaz"
    PALSAM = "palsam"
    MESAYAAT = "mesayaat"


DEFAULT_COMPETITORS: tuple[str, ...] = tuple(c.value for c in Competitor)
