"""
Read-only flight and route catalog.

The catalog is the boundary to the external flight data source. The
engines only need lookup by id and iteration.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from core.models import Flight, Route


class FlightCatalog:
    """In-memory, read-only view of the known flights and routes."""

    def __init__(self, flights: Iterable[Flight], routes: Iterable[Route] = ()):
        self._flights: Dict[str, Flight] = {}
        for flight in flights:
            if flight.id in self._flights:
                raise ValueError(f"Duplicate flight id in catalog: {flight.id}")
            self._flights[flight.id] = flight
        self._routes: Dict[str, Route] = {r.id: r for r in routes}

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        return self._flights.get(flight_id)

    def get_route(self, route_id: str) -> Optional[Route]:
        return self._routes.get(route_id)

    @property
    def flights(self) -> List[Flight]:
        """All flights in catalog order."""
        return list(self._flights.values())

    @property
    def routes(self) -> List[Route]:
        return list(self._routes.values())

    def __contains__(self, flight_id: object) -> bool:
        return flight_id in self._flights

    def __iter__(self) -> Iterator[Flight]:
        return iter(list(self._flights.values()))

    def __len__(self) -> int:
        return len(self._flights)

    def __str__(self) -> str:
        return f"FlightCatalog({len(self._flights)} flights, {len(self._routes)} routes)"
