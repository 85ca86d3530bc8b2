"""
Sample flight catalog.

Market structure:
- JFK-LAX, ORD-SFO, ATL-MIA: popular trunk routes
- BOS-DEN, SEA-LAS, DFW-ORD: secondary routes with uneven loads

Flights are spread over the next few days so pricing sees a mix of
last-minute, short-horizon and far-out departures.
"""

import sys
from pathlib import Path
from datetime import date, time, timedelta
from typing import List, Optional

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.catalog import FlightCatalog
from core.models import Flight, Route, Seasonality


def create_sample_routes() -> List[Route]:
    """Create the route network with aggregate performance figures."""
    return [
        Route(id="R1", origin="JFK", destination="LAX", distance=3983,
              average_load_factor=88, frequency=14, seasonality=Seasonality.HIGH,
              profitability=0.18),
        Route(id="R2", origin="ORD", destination="SFO", distance=2963,
              average_load_factor=76, frequency=10, seasonality=Seasonality.MEDIUM,
              profitability=0.12),
        Route(id="R3", origin="ATL", destination="MIA", distance=960,
              average_load_factor=82, frequency=12, seasonality=Seasonality.HIGH,
              profitability=0.15),
        Route(id="R4", origin="BOS", destination="DEN", distance=2824,
              average_load_factor=54, frequency=9, seasonality=Seasonality.LOW,
              profitability=-0.04),
        Route(id="R5", origin="SEA", destination="LAS", distance=1398,
              average_load_factor=63, frequency=8, seasonality=Seasonality.MEDIUM,
              profitability=0.03),
        Route(id="R6", origin="DFW", destination="ORD", distance=1290,
              average_load_factor=49, frequency=11, seasonality=Seasonality.LOW,
              profitability=-0.02),
    ]


def create_sample_flights(base_date: Optional[date] = None) -> List[Flight]:
    """
    Create sample flights.

    Args:
        base_date: First service date (defaults to today)

    Returns:
        List of flights across the sample routes
    """
    base_date = base_date or date.today()

    def day(offset: int) -> date:
        return base_date + timedelta(days=offset)

    return [
        Flight(id="FL001", flight_number="AA100", airline="American Airlines",
               origin="JFK", destination="LAX", departure_time=time(6, 30),
               arrival_time=time(9, 45), aircraft="Boeing 737", total_seats=180,
               booked_seats=171, price=349, date=day(1)),
        Flight(id="FL002", flight_number="DL402", airline="Delta Air Lines",
               origin="JFK", destination="LAX", departure_time=time(14, 15),
               arrival_time=time(17, 30), aircraft="Airbus A321", total_seats=190,
               booked_seats=142, price=329, date=day(3)),
        Flight(id="FL003", flight_number="UA225", airline="United Airlines",
               origin="ORD", destination="SFO", departure_time=time(8, 0),
               arrival_time=time(10, 40), aircraft="Boeing 757", total_seats=200,
               booked_seats=168, price=289, date=day(0)),
        Flight(id="FL004", flight_number="UA227", airline="United Airlines",
               origin="ORD", destination="SFO", departure_time=time(21, 45),
               arrival_time=time(0, 25), aircraft="Boeing 787", total_seats=250,
               booked_seats=98, price=259, date=day(2)),
        Flight(id="FL005", flight_number="DL1180", airline="Delta Air Lines",
               origin="ATL", destination="MIA", departure_time=time(7, 10),
               arrival_time=time(9, 5), aircraft="Boeing 737", total_seats=160,
               booked_seats=150, price=189, date=day(1)),
        Flight(id="FL006", flight_number="DL1184", airline="Delta Air Lines",
               origin="ATL", destination="MIA", departure_time=time(18, 20),
               arrival_time=time(20, 15), aircraft="Airbus A320", total_seats=150,
               booked_seats=83, price=169, date=day(6)),
        Flight(id="FL007", flight_number="B6520", airline="JetBlue Airways",
               origin="BOS", destination="DEN", departure_time=time(5, 55),
               arrival_time=time(8, 50), aircraft="Airbus A321", total_seats=200,
               booked_seats=72, price=219, date=day(2)),
        Flight(id="FL008", flight_number="UA1342", airline="United Airlines",
               origin="BOS", destination="DEN", departure_time=time(16, 5),
               arrival_time=time(19, 0), aircraft="Boeing 737", total_seats=180,
               booked_seats=101, price=239, date=day(9)),
        Flight(id="FL009", flight_number="AS330", airline="Alaska Airlines",
               origin="SEA", destination="LAS", departure_time=time(11, 30),
               arrival_time=time(14, 0), aircraft="Boeing 737", total_seats=178,
               booked_seats=117, price=149, date=day(4)),
        Flight(id="FL010", flight_number="WN2210", airline="Southwest Airlines",
               origin="SEA", destination="LAS", departure_time=time(22, 10),
               arrival_time=time(0, 40), aircraft="Boeing 737", total_seats=175,
               booked_seats=61, price=119, date=day(1)),
        Flight(id="FL011", flight_number="AA2451", airline="American Airlines",
               origin="DFW", destination="ORD", departure_time=time(9, 40),
               arrival_time=time(12, 5), aircraft="Boeing 777", total_seats=300,
               booked_seats=126, price=199, date=day(5)),
        Flight(id="FL012", flight_number="AA2457", airline="American Airlines",
               origin="DFW", destination="ORD", departure_time=time(19, 25),
               arrival_time=time(21, 50), aircraft="Airbus A320", total_seats=150,
               booked_seats=139, price=179, date=day(0)),
    ]


def create_sample_catalog(base_date: Optional[date] = None) -> FlightCatalog:
    """Create the sample catalog of flights and routes."""
    return FlightCatalog(create_sample_flights(base_date), create_sample_routes())
