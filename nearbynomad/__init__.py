"""NearbyNomad: mood-based recommendations for places near the user."""
