"""
Ride-hailing links for recommended places.

Responsibilities:
- Build app deep links and web fallback links between two coordinates.
- Produce local fare and pickup-time estimates per product.
- Chain rides across the stops of an itinerary.
"""
