"""
Mood-aware place recommendation engine.

Responsibilities:
- Normalise raw mood-form input into canonical preferences.
- Score every catalog place with an additive, table-driven heuristic.
- Rank with per-request jitter and occasional top-pick rotation.
- Build itineraries and random "surprise me" picks from ranked places.
"""
