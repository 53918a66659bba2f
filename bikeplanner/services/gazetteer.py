"""Offline place lookup used when the geocoding provider is unavailable."""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from bikeplanner.domain.models import Coordinate

logger = logging.getLogger(__name__)


PLACES: Mapping[str, Coordinate] = {
    # major cities
    "berlin": Coordinate(52.52, 13.405),
    "münchen": Coordinate(48.1351, 11.582),
    "hamburg": Coordinate(53.5511, 9.9937),
    "köln": Coordinate(50.9375, 6.9603),
    "frankfurt": Coordinate(50.1109, 8.6821),
    "stuttgart": Coordinate(48.7758, 9.1829),
    "düsseldorf": Coordinate(51.2277, 6.7735),
    "dortmund": Coordinate(51.5136, 7.4653),
    "essen": Coordinate(51.4556, 7.0116),
    "leipzig": Coordinate(51.3397, 12.3731),
    "bremen": Coordinate(53.0793, 8.8017),
    "dresden": Coordinate(51.0504, 13.7373),
    "hannover": Coordinate(52.3759, 9.732),
    "nürnberg": Coordinate(49.4521, 11.0767),
    "bielefeld": Coordinate(52.0302, 8.5325),
    "münster": Coordinate(51.9607, 7.6261),
    "paderborn": Coordinate(51.7189, 8.7575),
    # Lippe
    "lemgo": Coordinate(52.0286, 8.8998),
    "detmold": Coordinate(51.9387, 8.8794),
    "bad salzuflen": Coordinate(52.0864, 8.7491),
    "lage": Coordinate(51.9929, 8.7886),
    "blomberg": Coordinate(51.9439, 9.0906),
    "horn": Coordinate(51.8644, 8.9736),
    "leopoldshöhe": Coordinate(52.0167, 8.7),
    "oerlinghausen": Coordinate(51.9667, 8.6667),
    "schieder": Coordinate(51.9167, 9.1667),
    "schlangen": Coordinate(51.7833, 8.8333),
    "augustdorf": Coordinate(51.9, 8.7333),
}

_BIELEFELD = PLACES["bielefeld"]
_MUNICH_CENTRE = Coordinate(48.1374, 11.5755)

POSTAL_CODES: Mapping[str, Coordinate] = {
    "33602": _BIELEFELD,
    "33604": _BIELEFELD,
    "33605": _BIELEFELD,
    "33607": _BIELEFELD,
    "33609": _BIELEFELD,
    "33611": _BIELEFELD,
    "33613": _BIELEFELD,
    "33615": _BIELEFELD,
    "33617": _BIELEFELD,
    "33619": _BIELEFELD,
    "33818": PLACES["leopoldshöhe"],
    "32657": PLACES["lemgo"],
    "32756": PLACES["detmold"],
    "32105": PLACES["bad salzuflen"],
    "32791": PLACES["lage"],
    "32825": PLACES["blomberg"],
    "32805": PLACES["horn"],  # Horn-Bad Meinberg
    "33813": PLACES["oerlinghausen"],
    "32816": PLACES["schieder"],  # Schieder-Schwalenberg
    "33189": PLACES["schlangen"],
    "32832": PLACES["augustdorf"],
    "10115": Coordinate(52.5244, 13.4105),
    "10117": Coordinate(52.5186, 13.3761),
    "10119": Coordinate(52.5297, 13.4019),
    "80331": _MUNICH_CENTRE,
    "80333": _MUNICH_CENTRE,
    "80335": _MUNICH_CENTRE,
    "20095": PLACES["hamburg"],
    "20097": PLACES["hamburg"],
    "20099": PLACES["hamburg"],
    "50667": PLACES["köln"],
    "50668": PLACES["köln"],
    "50670": PLACES["köln"],
    "60306": PLACES["frankfurt"],
    "60308": PLACES["frankfurt"],
    "60311": PLACES["frankfurt"],
}


@dataclass(frozen=True)
class GazetteerMatch:
    name: str
    coordinate: Coordinate

    @property
    def display_name(self) -> str:
        return self.name if self.name.isdigit() else self.name.title()


class StaticGazetteer:
    """Postal codes match exactly and are tried first. Place names match
    when either string contains the other; the first entry in table order
    wins."""

    def __init__(
        self,
        postal_codes: Optional[Mapping[str, Coordinate]] = None,
        places: Optional[Mapping[str, Coordinate]] = None,
    ) -> None:
        self.postal_codes = dict(POSTAL_CODES if postal_codes is None else postal_codes)
        self.places = dict(PLACES if places is None else places)

    def lookup(self, text: str) -> Optional[GazetteerMatch]:
        query = text.strip().lower()
        if not query:
            return None
        return self.lookup_postal_code(query) or self.lookup_place(query)

    def lookup_postal_code(self, query: str) -> Optional[GazetteerMatch]:
        coordinate = self.postal_codes.get(query)
        if coordinate is None:
            return None
        return GazetteerMatch(query, coordinate)

    def lookup_place(self, query: str) -> Optional[GazetteerMatch]:
        for name, coordinate in self.places.items():
            if name in query or query in name:
                logger.debug("Gazetteer matched %r to %s", query, name)
                return GazetteerMatch(name, coordinate)
        return None


gazetteer = StaticGazetteer()
