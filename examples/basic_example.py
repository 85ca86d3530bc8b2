"""
Example: Real-time pricing and route optimization walkthrough.

This demonstrates:
- Building a flight catalog
- Subscribing to price updates and setting a price alert
- Batch pricing with best-deal ranking
- Price history and trend analysis
- Optimization scenarios, what-if simulation and roadmap
- Exporting results to CSV
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import PricingConfig, setup_logging
from core.data_export import PricingDataExporter
from api.service import PricingService
from examples.sample_catalog import create_sample_catalog


def main():
    """Run the walkthrough."""

    print("="*70)
    print("Airline Pricing Engine - Basic Example")
    print("="*70)
    print()

    # Step 1: Configure
    config = PricingConfig(random_seed=42, progress_bar=True, log_level="WARNING")
    setup_logging(config)

    # Step 2: Create catalog and service
    print("Step 1: Creating catalog...")
    catalog = create_sample_catalog()
    service = PricingService(catalog, config=config)
    print(f"  - Flights: {len(catalog)}")
    print(f"  - Routes: {len(catalog.routes)}")
    print()

    # Step 3: Listen for prices
    print("Step 2: Registering subscription and alert on FL004...")
    received = []
    alerts = []
    subscription = service.subscribe("FL004", received.append)
    service.create_price_alert("FL004", threshold=240, callback=alerts.append)
    print()

    # Step 4: Price every flight a few times
    print("Step 3: Running batch pricing (3 rounds)...")
    exporter = PricingDataExporter(config.output_dir)
    for _ in range(3):
        batch = service.get_batch_prices()
        exporter.add_updates(service.state.history.latest(u['flight_id']) for u in batch['price_updates'])
    subscription.cancel()
    print(f"  - FL004 updates received: {len(received)}")
    print(f"  - FL004 alerts fired: {len(alerts)}")
    print()

    print("Best Current Deals:")
    for deal in batch['best_deals']:
        print(f"  {deal['flight_id']}: ${deal['old_price']:.0f} -> ${deal['new_price']} "
              f"(-{deal['discount']}%) {deal['reason']}")
    print()

    # Step 5: History
    history = service.get_price_history("FL001")
    trend = history['price_trend']
    print("Step 4: FL001 Price History")
    print(f"  Prices: {[h['new_price'] for h in history['price_history']]}")
    print(f"  Trend: {trend['trend']} (avg ${trend['average_price']:.2f}, "
          f"volatility {trend['price_volatility']:.2f})")
    print()

    # Step 6: Optimization
    print("Step 5: Optimization Scenarios")
    print("-"*70)
    overview = service.get_optimization_overview()
    for scenario in overview['scenarios']:
        simulation = overview['simulations'][scenario['id']]
        improvements = simulation['improvements']
        print(f"  {scenario['name']} [{scenario['implementation_complexity']}]")
        print(f"    Revenue Gain: ${improvements['revenue_gain']:,.0f}")
        print(f"    Load Factor Gain: {improvements['load_factor_gain']:+.1f} pp")
        print(f"    ROI: {improvements['roi']:.1f}%")
    print("-"*70)
    print()

    print("Implementation Roadmap:")
    for phase in overview['roadmap']:
        names = ", ".join(s['id'] for s in phase['scenarios']) or "-"
        print(f"  {phase['phase']} ({phase['duration']}): {names}")
    print()

    # Step 7: Dashboard and export
    dashboard = service.get_dashboard_analytics()
    print("Dashboard:")
    print(f"  Average Load Factor: {dashboard['average_load_factor']}%")
    print(f"  Empty Seats: {dashboard['empty_seats_today']}")
    print(f"  Revenue Opportunity: ${dashboard['revenue_opportunity']:,}")
    print(f"  Flights at Risk: {dashboard['routes_at_risk']}")
    print()

    simulations = service.simulator.simulate_all(
        catalog.flights, service.scenarios.generate(catalog.flights, catalog.routes)
    )
    exporter.add_simulations(simulations)
    exports = exporter.export_all(service.state.history)
    print("Exported Files:")
    for name, path in exports.items():
        print(f"  {name}: {path}")

    print()
    print("="*70)
    print("Example Complete!")
    print("="*70)

    return service


if __name__ == "__main__":
    service = main()
