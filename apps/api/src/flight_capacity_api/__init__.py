"""Flight Capacity API: seat availability aggregation over Amadeus."""
