"""HerJourney pregnancy and cycle tracking API."""
