import pytest

from nearbynomad.recommendations.config import DEFAULT_ENGINE_CONFIG, ScoringWeights
from nearbynomad.recommendations.data_store import load_catalog
from nearbynomad.recommendations.errors import EngineConfigurationError
from nearbynomad.recommendations.models import Place, UserPreferences
from nearbynomad.recommendations.normalizer import normalize
from nearbynomad.recommendations.scoring import ScoringEngine

engine = ScoringEngine()


def _place(**overrides):
    fields = {
        "id": "p1",
        "name": "Test Place",
        "category": "Restaurant",
        "latitude": 12.97,
        "longitude": 77.59,
        "rating": 3.0,
        "price_level": 2,
        "distance_km": 1.0,
    }
    fields.update(overrides)
    return Place(**fields)


def _prefs(**overrides):
    fields = {
        "mood": "happy",
        "interests": frozenset({"eat"}),
        "energy_level": "medium",
        "budget": "medium",
        "transport": "walk",
        "social_mode": "solo",
        "time_of_day": "midday",
    }
    fields.update(overrides)
    return UserPreferences(**fields)


def test_breakdown_has_every_term():
    breakdown = engine.score_breakdown(_place(), _prefs())
    assert set(breakdown) == {
        "mood", "interest", "distance", "energy", "budget", "transport",
        "social", "accessibility", "food", "rating", "time_of_day",
    }


def test_score_is_deterministic():
    place, prefs = _place(), _prefs()
    assert engine.score(place, prefs) == engine.score(place, prefs)


def test_score_never_negative():
    awful = _place(category="Spaceport", distance_km=100.0, price_level=4, rating=0.0)
    prefs = _prefs(budget="low", accessibility=frozenset({"wheelchair", "pet"}))
    assert sum(engine.score_breakdown(awful, prefs).values()) < 0
    assert engine.score(awful, prefs) == 0.0


def test_mood_and_interest_terms():
    assert engine.mood_term(_place(category="Cafe"), _prefs()) == pytest.approx(27.0)
    prefs = _prefs(interests=frozenset({"eat", "shop"}))
    assert engine.interest_term(_place(category="Restaurant"), prefs) == pytest.approx(28.0)


def test_unknown_category_scores_zero_for_lookups():
    place = _place(category="Spaceport")
    prefs = _prefs()
    assert engine.mood_term(place, prefs) == 0.0
    assert engine.interest_term(place, prefs) == 0.0
    assert engine.time_of_day_term(place, prefs) == 0.0


def test_category_lookup_ignores_case():
    assert engine.mood_term(_place(category="restaurant"), _prefs()) == pytest.approx(24.0)


def test_distance_term_decays_then_penalises():
    prefs = _prefs(energy_level="medium")
    assert engine.distance_term(_place(distance_km=0.0), prefs) == pytest.approx(20.0)
    assert engine.distance_term(_place(distance_km=1.0), prefs) == pytest.approx(16.0)
    assert engine.distance_term(_place(distance_km=4.0), prefs) == pytest.approx(4.0)
    assert engine.distance_term(_place(distance_km=5.0), prefs) == pytest.approx(0.0)
    assert engine.distance_term(_place(distance_km=7.0), prefs) == pytest.approx(-4.0)


def test_closer_places_never_score_lower():
    prefs = _prefs()
    scores = [engine.score(_place(distance_km=d), prefs) for d in (0.2, 1.0, 3.0, 6.0, 12.0)]
    assert scores == sorted(scores, reverse=True)


def test_energy_tier_controls_range():
    place = _place(distance_km=8.0)
    assert engine.distance_term(place, _prefs(energy_level="high")) > 0
    assert engine.distance_term(place, _prefs(energy_level="low")) < 0


def test_budget_term():
    prefs = _prefs(budget="medium")
    assert engine.budget_term(_place(price_level=0), prefs) == pytest.approx(15.0)
    assert engine.budget_term(_place(price_level=1), prefs) == pytest.approx(7.5)
    assert engine.budget_term(_place(price_level=2), prefs) == pytest.approx(0.0)
    assert engine.budget_term(_place(price_level=4), prefs) == pytest.approx(-10.0)


def test_transport_term_needs_support_and_range():
    prefs = _prefs(transport="walk")
    assert engine.transport_term(_place(transport_modes=["walk"], distance_km=1.5), prefs) == pytest.approx(10.0)
    assert engine.transport_term(_place(transport_modes=["walk"], distance_km=3.0), prefs) == 0.0
    assert engine.transport_term(_place(transport_modes=["car"], distance_km=1.0), prefs) == 0.0
    car = _prefs(transport="car")
    assert engine.transport_term(_place(transport_modes=["Car"], distance_km=15.0), car) == pytest.approx(6.0)


def test_social_term_counts_keyword_tags():
    place = _place(social_modes=["solo"], tags=("Quiet", "Cozy", "Loud"))
    assert engine.social_term(place, _prefs(social_mode="solo")) == pytest.approx(25.0)
    assert engine.social_term(place, _prefs(social_mode="friends")) == 0.0


def test_accessibility_mismatch_scores_lower():
    prefs = _prefs(accessibility=frozenset({"wheelchair"}))
    accessible = _place(wheelchair_accessible=True)
    not_accessible = _place(wheelchair_accessible=False)
    assert engine.accessibility_term(accessible, prefs) == pytest.approx(10.0)
    assert engine.accessibility_term(not_accessible, prefs) == pytest.approx(-25.0)
    assert engine.score(accessible, prefs) > engine.score(not_accessible, prefs)


def test_food_term_only_with_eat_interest():
    place = _place(food_types=["Pizza", "pasta"])
    assert engine.food_term(place, _prefs(food_types=frozenset({"pizza"}))) == pytest.approx(15.0)
    no_eat = _prefs(interests=frozenset({"shop"}), food_types=frozenset({"pizza"}))
    assert engine.food_term(place, no_eat) == 0.0
    park = _place(category="Park", food_types=["pizza"])
    assert engine.food_term(park, _prefs(food_types=frozenset({"pizza"}))) == 0.0


def test_rating_term_centred_on_three():
    assert engine.rating_term(_place(rating=3.0)) == 0.0
    assert engine.rating_term(_place(rating=5.0)) == pytest.approx(10.0)
    assert engine.rating_term(_place(rating=4.0)) == pytest.approx(5.0)
    assert engine.rating_term(_place(rating=1.0)) == pytest.approx(-10.0)


def test_time_of_day_term():
    assert engine.time_of_day_term(_place(category="Restaurant"), _prefs(time_of_day="midday")) == pytest.approx(10.0)
    assert engine.time_of_day_term(_place(category="Bar"), _prefs(time_of_day="morning")) == 0.0


def test_custom_weights_are_used():
    heavy = ScoringEngine(weights=ScoringWeights(mood=100.0))
    assert heavy.mood_term(_place(category="Cafe"), _prefs()) == pytest.approx(90.0)


def test_negative_penalty_rejected():
    with pytest.raises(EngineConfigurationError):
        ScoringEngine(weights=ScoringWeights(distance_penalty_per_km=-1.0))


def test_match_reason_lists_strong_factors():
    place = _place(category="Restaurant", distance_km=0.5, rating=4.5)
    assert engine.match_reason(place, _prefs()) == (
        "Perfect for happy mood, Matches your eat interest, "
        "Perfect distance for medium energy, Highly rated (4.5/5)"
    )


def test_match_reason_mentions_accessibility():
    place = _place(category="Spaceport", distance_km=50.0, kid_friendly=True)
    prefs = _prefs(accessibility=frozenset({"kid"}))
    assert engine.match_reason(place, prefs) == "Meets your accessibility needs"


def test_match_reason_falls_back_to_generic():
    place = _place(category="Spaceport", distance_km=50.0, rating=3.0)
    assert engine.match_reason(place, _prefs()) == "Good match for your preferences"


def test_restaurant_beats_far_park_for_hungry_happy_user():
    prefs = _prefs()
    restaurant = _place(id="r", category="Restaurant", distance_km=0.5, rating=4.5)
    park = _place(id="p", category="Park", distance_km=10.0, rating=4.0, price_level=0)
    assert engine.score(restaurant, prefs) > engine.score(park, prefs)


def test_energy_term_rewards_matching_tier():
    prefs = _prefs(energy_level="low")
    assert engine.energy_term(_place(energy_level="low"), prefs) == pytest.approx(15.0)
    assert engine.energy_term(_place(energy_level="Very High"), prefs) == 0.0
    assert engine.energy_term(_place(), prefs) == 0.0
    assert engine.score(_place(energy_level="low"), prefs) > engine.score(_place(), prefs)


def test_multi_word_food_type_matches_bundled_catalog():
    places = {p.id: p for p in load_catalog(DEFAULT_ENGINE_CONFIG.catalog_path)}
    prefs = normalize({"mood": "happy", "interests": ["eat"], "foodTypes": ["South Indian"]})
    assert engine.food_term(places["2"], prefs) == pytest.approx(15.0)
